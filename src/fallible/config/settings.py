"""Environment-based configuration using pydantic-settings.

Example:
    >>> from fallible.config import get_settings
    >>> settings = get_settings()
    >>> settings.bridge.log_captures
    False

    # Or with environment variables:
    # FALLIBLE_LOG_LEVEL=DEBUG
    # FALLIBLE_LOG_FORMAT=json
    # FALLIBLE_BRIDGE_LOG_CAPTURES=true
    #
    # The same names are read from a .env file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "none"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class BridgeSettings(BaseSettings):
    """Async bridge behavior."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_BRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_captures: bool = Field(default=False, description="Emit a debug event for each captured exception")
    include_trace: bool = Field(default=False, description="Attach formatted traceback to capture events")


class FallibleSettings(BaseSettings):
    """Root settings, loaded from FALLIBLE_* environment variables and .env.

    Example environment variables:
        FALLIBLE_DEBUG=true
        FALLIBLE_LOG_LEVEL=DEBUG
        FALLIBLE_BRIDGE_LOG_CAPTURES=true
    """

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode; capture events carry tracebacks")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    bridge: BridgeSettings = Field(default_factory=BridgeSettings)


@lru_cache(maxsize=1)
def get_settings() -> FallibleSettings:
    """Get the global settings instance (cached)."""
    return FallibleSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() rereads the environment."""
    get_settings.cache_clear()
