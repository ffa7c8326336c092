"""Environment-based configuration using pydantic-settings.

Example:
    >>> from taglog.foundation.config import get_settings
    >>> get_settings().default_tag
    'TagLog'

    # Or with environment variables:
    # TAGLOG_ENABLED=false
    # TAGLOG_SINK=console
    # TAGLOG_MIN_LEVEL=INFO
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taglog.logging.levels import Level
from taglog.logging.logger import DEFAULT_TAG


class TaglogSettings(BaseSettings):
    """Root settings, loaded from ``TAGLOG_*`` variables and an optional .env file."""

    model_config = SettingsConfigDict(
        env_prefix="TAGLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    enabled: bool = Field(default=True, description="Master switch; False drops every call")
    default_tag: Annotated[str, Field(min_length=1)] = DEFAULT_TAG
    min_level: Level = Field(default=Level.VERBOSE, description="Lines below this level are dropped")
    sink: Literal["logging", "console", "none"] = "logging"
    logger_namespace: str = Field(default="", description="Prefix for stdlib logger names")
    colors: bool | None = Field(default=None, description="Console colors, None = auto-detect")
    json_indent: PositiveInt = 4
    xml_indent: PositiveInt = 2
    xml_stop_at_blank_line: bool = Field(
        default=False,
        description="Stop reading XML files at the first blank line",
    )

    @field_validator("min_level", mode="before")
    @classmethod
    def _parse_level(cls, v: str | int | Level) -> Level:
        """Accept level names and letters (INFO, i, WARNING) as well as numbers."""
        return Level.parse(v)

    @field_validator("sink", mode="before")
    @classmethod
    def _normalize_sink(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


@lru_cache(maxsize=1)
def get_settings() -> TaglogSettings:
    """Get the global settings instance (cached)."""
    return TaglogSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
