"""Centralized configuration using Pydantic Settings with .env support.

Usage:
    from hostaddr.config import get_settings
    settings = get_settings()
    print(settings.format.ipv6_compression)

Environment variables are loaded from:
1. .env file in the working directory
2. System environment variables (override .env)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="HOSTADDR_")

    log: str = Field(
        default="WARNING",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for hostaddr.log (unset = no file logging)",
    )


class FormatSettings(BaseSettings):
    """Textual rendering of parsed addresses."""

    model_config = SettingsConfigDict(env_prefix="HOSTADDR_FORMAT_")

    ipv6_compression: Literal["longest", "first"] = Field(
        default="longest",
        description="Zero run collapsed into '::' (longest = RFC 5952, first = first run of any length)",
    )


class HostaddrSettings(BaseSettings):
    """Main hostaddr settings, loads from .env file."""

    model_config = SettingsConfigDict(
        env_prefix="HOSTADDR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Nested settings (each reads its own env vars)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    format: FormatSettings = Field(default_factory=FormatSettings)


@lru_cache
def get_settings() -> HostaddrSettings:
    """Get cached settings instance."""
    return HostaddrSettings()


# Export all settings classes for introspection (used by generate_env_example.py)
__all__ = [
    "HostaddrSettings",
    "get_settings",
    "LoggingSettings",
    "FormatSettings",
]
