"""Application settings with modern Pydantic v2 patterns."""

from functools import lru_cache

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ICON = "Applications/16x16/document.png"


class SearchSettings(BaseModel):
    """Search step configuration settings."""

    content_search_enabled: bool = Field(
        default=True,
        description="Whether index-backed search is enabled; otherwise defer to legacy search",
    )
    index_switch_tracking: bool = Field(
        default=False,
        description="Honor the index switch tracker and stop when an index is switched off",
    )
    show_hidden_items: bool = Field(
        default=False, description="Include hidden items and their descendants"
    )
    default_icon: str | None = Field(
        default=DEFAULT_ICON,
        description="Icon used when neither the hit nor its entity carries one",
    )
    default_limit: int = Field(
        default=20, ge=0, description="Result limit used when a request names none"
    )


class AppSettings(BaseSettings):
    """Main application settings with modern Pydantic v2 patterns."""

    model_config = SettingsConfigDict(
        env_prefix="CONTENT_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
        validate_default=True,
    )

    # Application metadata
    app_name: str = Field(default="Content Search Step", description="Application name")
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Nested configurations
    search: SearchSettings = Field(
        default_factory=SearchSettings, description="Search step settings"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "staging", "production", "test"}
        if v.lower() not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
