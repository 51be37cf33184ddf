"""Data models and host interfaces."""

from .base import HealthStatus, SearchSurface
from .entities import ContentEntity
from .query import QueryFilter, SearchArgs, SearchRequest
from .results import DisplayResult, RawHit, SearchResultSink

__all__ = [
    "ContentEntity",
    "DisplayResult",
    "HealthStatus",
    "QueryFilter",
    "RawHit",
    "SearchArgs",
    "SearchRequest",
    "SearchResultSink",
    "SearchSurface",
]
