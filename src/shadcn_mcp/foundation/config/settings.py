"""Environment-based configuration using pydantic-settings.

Example:
    >>> from shadcn_mcp.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.port
    3001
    >>> settings.cache.ttl
    3600.0

    # Or with environment variables:
    # PORT=8080
    # SHADCN_MCP_TRANSPORT=sse
    # SHADCN_MCP_CACHE_TTL=600
    # SHADCN_MCP_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import AliasChoices, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...io.upstream.client import GITHUB_RAW_URL, SHADCN_DOCS_URL, UPSTREAM_TIMEOUT

Transport = Literal["stdio", "sse"]


class CacheSettings(BaseSettings):
    """Cache-related configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SHADCN_MCP_CACHE_",
        extra="ignore",
    )

    ttl: float = Field(default=3600.0, description="Default entry TTL in seconds, <= 0 disables expiry")


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SHADCN_MCP_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class ServerSettings(BaseSettings):
    """Root settings for the server.

    Only the listen port is expected to be set in practice; it is read from
    the bare PORT variable used by container platforms.
    """

    model_config = SettingsConfigDict(
        env_prefix="SHADCN_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        populate_by_name=True,
        validate_default=True,
    )

    name: str = "shadcn-ui-mcp"
    transport: Transport = "stdio"
    host: str = "0.0.0.0"
    port: Annotated[int, Field(ge=1, le=65535)] = Field(
        default=3001,
        validation_alias=AliasChoices("PORT", "SHADCN_MCP_PORT"),
        description="Listen port for the SSE transport",
    )

    cache: CacheSettings = Field(default_factory=CacheSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("transport", mode="before")
    @classmethod
    def _normalize_transport(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v

    @computed_field
    @property
    def upstream(self) -> dict[str, object]:
        """Fixed upstream endpoints (not configurable)."""
        return {"docs": SHADCN_DOCS_URL, "github": GITHUB_RAW_URL, "timeout": UPSTREAM_TIMEOUT}


@lru_cache(maxsize=1)
def get_settings() -> ServerSettings:
    """Get the process settings (cached)."""
    return ServerSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
