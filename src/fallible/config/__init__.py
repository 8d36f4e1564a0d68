"""Configuration management using pydantic-settings."""

from .settings import (
    BridgeSettings,
    FallibleSettings,
    LoggingSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "BridgeSettings",
    "FallibleSettings",
    "LoggingSettings",
    "clear_settings_cache",
    "get_settings",
]
