"""Configuration management using pydantic-settings."""

from .settings import (
    CacheSettings,
    LoggingSettings,
    ServerSettings,
    Transport,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "CacheSettings",
    "LoggingSettings",
    "ServerSettings",
    "Transport",
    "clear_settings_cache",
    "get_settings",
]
