"""Centralized configuration management using Pydantic Settings.

This module provides typed configuration for the availability engine and
its HTTP surface, loaded from environment variables with sensible defaults.

Usage:
    from flock.config import get_settings
    settings = get_settings()
    slot_minutes = settings.availability.slot_minutes
"""

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AvailabilitySettings(BaseSettings):
    """Availability engine configuration."""

    model_config = SettingsConfigDict(env_prefix="AVAILABILITY_", extra="ignore")

    slot_minutes: int = Field(default=15, description="Width of a grid slot in minutes")
    timezone: str = Field(default="UTC", description="Timezone used to lay out grid days")
    recurrence_errors: Literal["raise", "skip"] = Field(
        default="raise",
        description="What to do when a recurrence rule fails to expand",
    )
    max_grid_days: int = Field(default=62, description="Maximum number of days in one grid")

    @field_validator("slot_minutes", "max_grid_days")
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("timezone")
    @classmethod
    def must_be_known_zone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone: {v}") from e
        return v


class CorsSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    origins_raw: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )
    origins_regex: str = Field(
        default="",
        validation_alias="CORS_ORIGINS_REGEX",
        description="Regex pattern for origins",
    )

    @property
    def origins(self) -> list[str]:
        """Parse comma-separated origins into list."""
        return [o.strip() for o in self.origins_raw.split(",") if o.strip()]

    @property
    def allow_credentials(self) -> bool:
        """Credentials not allowed with wildcard origins."""
        return self.origins != ["*"] and not self.origins_regex


class DebugSettings(BaseSettings):
    """Debug flags configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    availability: bool = Field(default=False, alias="availability_debug")

    @field_validator("*", mode="before")
    @classmethod
    def parse_bool(cls, v):
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes")
        return bool(v)


class Settings:
    """Main application settings combining all configuration sections.

    This is not a BaseSettings subclass to avoid env var conflicts.
    Each subsetting is loaded independently with its own prefix.
    """

    def __init__(self) -> None:
        self.availability = AvailabilitySettings()
        self.cors = CorsSettings()
        self.debug = DebugSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance (singleton pattern)."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear cached settings (useful for testing)."""
    get_settings.cache_clear()
