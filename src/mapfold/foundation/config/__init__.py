"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    MapfoldSettings,
    MappingSettings,
    ParallelSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "MapfoldSettings",
    "MappingSettings",
    "ParallelSettings",
    "clear_settings_cache",
    "get_settings",
]
