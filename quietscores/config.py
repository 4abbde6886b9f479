"""Application settings.

Loaded from environment variables prefixed with QUIETSCORES_ (or a local
.env file). Use get_settings() everywhere; the instance is cached.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the feed client, cache and display layer."""

    model_config = SettingsConfigDict(
        env_prefix="QUIETSCORES_",
        env_file=".env",
        extra="ignore",
    )

    # Display
    timezone: str = "America/New_York"
    time_format: str = "12h"  # "12h" | "24h"

    # Feed client
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    retry_count: int = Field(default=3, ge=1)
    retry_delay_seconds: float = Field(default=1.0, ge=0)
    requests_per_second: float = Field(default=10.0, gt=0)
    burst_size: int = Field(default=20, ge=1)
    max_workers: int = Field(default=6, ge=1)

    # Standings are refreshed wholesale after this many seconds
    standings_ttl_seconds: int = Field(default=300, ge=0)

    log_level: str = "INFO"

    @field_validator("time_format")
    @classmethod
    def _check_time_format(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("12h", "24h"):
            raise ValueError("time_format must be '12h' or '24h'")
        return value

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value


@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()


def get_user_timezone_str() -> str:
    return get_settings().timezone


def get_user_timezone() -> ZoneInfo:
    return ZoneInfo(get_settings().timezone)


def get_time_format() -> str:
    return get_settings().time_format
