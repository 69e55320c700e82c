# ─────────────────────────────────────────────────────────────────
# config.py — Environment Configuration
#
# Settings are read from environment variables (prefix UPTIME_)
# or a local .env file:
#
#   UPTIME_HEARTBEAT_INTERVAL=300      → seconds, or ISO 8601 "PT5M"
#   UPTIME_LOG_LEVEL=DEBUG
#   UPTIME_SHARD_COUNT=32
# ─────────────────────────────────────────────────────────────────

import logging
from datetime import timedelta

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HEARTBEAT_INTERVAL = timedelta(minutes=5)

# Default observation horizon for dashboards reading uptime figures
DEFAULT_WINDOW = timedelta(hours=24)


class TrackerSettings(BaseSettings):
    heartbeat_interval: timedelta = DEFAULT_HEARTBEAT_INTERVAL
    log_level: str = "INFO"
    shard_count: int = Field(16, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="UPTIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("heartbeat_interval", mode="before")
    @classmethod
    def _seconds_string(cls, v):
        # "300" from the environment means 300 seconds
        if isinstance(v, str):
            try:
                return float(v)
            except ValueError:
                return v
        return v

    @field_validator("heartbeat_interval")
    @classmethod
    def _positive_interval(cls, v: timedelta) -> timedelta:
        if v <= timedelta(0):
            raise ValueError("heartbeat_interval must be a positive duration")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level '{v}'")
        return level
