"""
Runtime configuration for the payments engine.

Values come from PAYMENTS_* environment variables or a .env file.
"""

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PAYMENTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level for stderr output",
    )
    log_format: str = Field(
        default="%(levelname)s: %(message)s",
        description="logging format string",
    )
    prefetch_records: int = Field(
        default=1024,
        ge=0,
        description="Records decoded ahead by the reader thread (0 = read inline)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level {v!r}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance. Call get_settings.cache_clear() to reload."""
    return Settings()
