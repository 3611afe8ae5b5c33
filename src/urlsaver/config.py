"""
Settings for URL Content Saver.

Values come from environment variables prefixed with URLSAVER_
(the HTTP port also honors the plain PORT variable).

Path policy variables (MCP_BASE_DIR, MCP_ALLOW_ANY_PATH, VSCODE_*) are not
settings: they are read per request through EnvironmentContext.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings."""

    model_config = SettingsConfigDict(
        env_prefix="URLSAVER_",
        extra="ignore",
        populate_by_name=True,
    )

    # HTTP transport
    host: str = "127.0.0.1"
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("URLSAVER_PORT", "PORT", "port"),
    )

    # Transfer (None means no limit)
    request_timeout: float | None = Field(default=None, gt=0)
    max_concurrent_transfers: int | None = Field(default=None, ge=1)
    chunk_size: int = Field(default=64 * 1024, ge=1024, le=16 * 1024 * 1024)
    follow_redirects: bool = True
    user_agent: str = "url-content-saver/1.0"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the settings singleton, creating it on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_settings(**overrides: Any) -> Settings:
    """Replace the singleton with settings built from overrides."""
    global _settings
    _settings = Settings(**overrides)
    return _settings


def reset_settings() -> None:
    """Drop the singleton so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None


__all__ = ["Settings", "get_settings", "configure_settings", "reset_settings"]
