"""Foundation - errors and configuration shared by every layer."""

from __future__ import annotations

__all__ = [
    # Errors
    "ErrorCode", "ServerError", "ServerException", "classify_exception",
    "invalid_params", "not_found", "internal_error", "format_validation_error",
    "ExtractionError", "UpstreamError",
    # Config
    "ServerSettings", "CacheSettings", "LoggingSettings", "get_settings", "clear_settings_cache",
]


def __getattr__(name: str):
    """Lazy imports to avoid circular dependencies."""
    if name in ("ErrorCode", "ServerError", "ServerException", "classify_exception",
                "invalid_params", "not_found", "internal_error", "format_validation_error",
                "ExtractionError", "UpstreamError"):
        from . import errors
        return getattr(errors, name)

    if name in ("ServerSettings", "CacheSettings", "LoggingSettings", "get_settings", "clear_settings_cache"):
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
