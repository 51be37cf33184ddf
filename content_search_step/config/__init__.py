"""Configuration management module."""

from .settings import DEFAULT_ICON, AppSettings, SearchSettings, get_settings

__all__ = [
    "DEFAULT_ICON",
    "AppSettings",
    "SearchSettings",
    "get_settings",
]
