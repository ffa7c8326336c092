"""Configuration management using pydantic-settings."""

from .settings import DEFAULT_TAG, TaglogSettings, clear_settings_cache, get_settings

__all__ = [
    "DEFAULT_TAG",
    "TaglogSettings",
    "clear_settings_cache",
    "get_settings",
]
