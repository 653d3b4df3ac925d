"""Environment-based configuration using pydantic-settings.

Example:
    >>> from mapfold.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.mapping.selector_policy
    'ignore'

    # Or with environment variables:
    # MAPFOLD_LOG_LEVEL=DEBUG
    # MAPFOLD_MAP_SELECTOR_POLICY=error
    # MAPFOLD_PARALLEL_MAX_WORKERS=8
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_CPU_COUNT = os.cpu_count() or 1


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MAPFOLD_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class MappingSettings(BaseSettings):
    """Mapper behavior."""

    model_config = SettingsConfigDict(
        env_prefix="MAPFOLD_MAP_",
        extra="ignore",
    )

    selector_policy: Literal["ignore", "error"] = Field(
        default="ignore",
        description="What map_at does with selectors naming a missing index or key",
    )


class ParallelSettings(BaseSettings):
    """Opt-in thread pool mapping."""

    model_config = SettingsConfigDict(
        env_prefix="MAPFOLD_PARALLEL_",
        extra="ignore",
    )

    max_workers: PositiveInt = Field(default=min(32, _CPU_COUNT + 4), description="Default pool size")
    thread_name_prefix: str = "mapfold-"


class MapfoldSettings(BaseSettings):
    """Root settings, loaded from MAPFOLD_* environment variables and .env files."""

    model_config = SettingsConfigDict(
        env_prefix="MAPFOLD_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    mapping: MappingSettings = Field(default_factory=MappingSettings)
    parallel: ParallelSettings = Field(default_factory=ParallelSettings)


@lru_cache(maxsize=1)
def get_settings() -> MapfoldSettings:
    """Get the global settings instance (cached)."""
    return MapfoldSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
