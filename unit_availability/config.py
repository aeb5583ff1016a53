"""Runtime settings for the availability engine, read from the environment."""

from __future__ import annotations

import os
from datetime import tzinfo

from dateutil import tz
from pydantic import BaseModel, Field, field_validator

_TRUTHY = {"1", "true", "yes"}


class Settings(BaseModel):
    timezone: str = "UTC"
    search_horizon_days: int = Field(default=365, gt=0)
    batch_timeout_seconds: float | None = Field(default=None, gt=0)
    default_search_limit: int = Field(default=50, gt=0)
    log_level: str = "INFO"
    seed_demo_data: bool = True

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        if tz.gettz(value) is None:
            raise ValueError(f"Unknown timezone: {value}")
        return value

    @classmethod
    def from_env(cls) -> Settings:
        timeout = os.getenv("AVAILABILITY_BATCH_TIMEOUT_SECONDS")
        return cls(
            timezone=os.getenv("AVAILABILITY_TIMEZONE", "UTC"),
            search_horizon_days=int(os.getenv("AVAILABILITY_SEARCH_HORIZON_DAYS", "365")),
            batch_timeout_seconds=float(timeout) if timeout else None,
            default_search_limit=int(os.getenv("AVAILABILITY_DEFAULT_SEARCH_LIMIT", "50")),
            log_level=os.getenv("AVAILABILITY_LOG_LEVEL", "INFO").upper(),
            seed_demo_data=os.getenv("AVAILABILITY_SEED_DEMO_DATA", "true").lower() in _TRUTHY,
        )

    @property
    def tzinfo(self) -> tzinfo:
        return tz.gettz(self.timezone)


settings = Settings.from_env()
