# ─────────────────────────────────────────────────────────────────
# models.py — Data Models (Pydantic Schemas)
#
# DeviceRecord is the per-device state the tracker keeps.
# DeviceStatus is the read-only snapshot handed out to callers
# (dashboards, operational checks).
#
# Both models are frozen: a record is never edited in place.
# Every heartbeat builds a NEW record and swaps it into the store,
# so a reader always gets last_heartbeat, first_seen and
# cumulative_uptime from the same update.
# ─────────────────────────────────────────────────────────────────

from datetime import datetime, timedelta
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class DeviceRecord(BaseModel):
    """
    Tracked state for one device.

    Created on the first heartbeat:
    {
        "first_seen": <t0>,
        "last_heartbeat": <t0>,
        "cumulative_uptime": 0:00:00
    }
    """

    model_config = ConfigDict(frozen=True)

    first_seen: datetime                     # set once, never overwritten
    last_heartbeat: datetime                 # most recent heartbeat
    cumulative_uptime: timedelta = timedelta(0)  # total "alive" time

    @classmethod
    def first(cls, timestamp: datetime) -> "DeviceRecord":
        return cls(first_seen=timestamp, last_heartbeat=timestamp)

    @property
    def observation_window(self) -> timedelta:
        """Time between the first and the most recent heartbeat."""
        return self.last_heartbeat - self.first_seen

    def advance(self, timestamp: datetime, heartbeat_interval: timedelta) -> "DeviceRecord":
        """
        Returns the record as it looks after a heartbeat at `timestamp`.

        The gap since the previous heartbeat only counts as alive time
        when 0 <= gap <= heartbeat_interval. Longer gaps and
        out-of-order timestamps (negative gaps) add nothing.
        """

        gap = timestamp - self.last_heartbeat
        uptime = self.cumulative_uptime
        if timedelta(0) <= gap <= heartbeat_interval:
            uptime = uptime + gap

        return DeviceRecord(
            first_seen=self.first_seen,
            last_heartbeat=timestamp,
            cumulative_uptime=uptime,
        )

    def uptime_percentage(self) -> float:
        window = self.observation_window

        # A single heartbeat (or no real span yet) is 100% by policy
        if window <= timedelta(0):
            return 100.0

        return min(100.0, 100.0 * (self.cumulative_uptime / window))

    def is_online(self, now: datetime, heartbeat_interval: timedelta) -> bool:
        # Only the upper bound is checked: a `now` earlier than the
        # last heartbeat gives a negative elapsed time and counts as online
        return now - self.last_heartbeat <= heartbeat_interval


class DeviceStatus(BaseModel):
    """
    Snapshot of one device, built from a single record read.

    {
        "device_id": "device-123",
        "online": true,
        "uptime_percentage": 98.5,
        "first_seen": "2025-01-15T10:00:00Z",
        "last_heartbeat": "2025-01-15T12:00:00Z",
        "cumulative_uptime": "PT1H58M"
    }
    """

    model_config = ConfigDict(frozen=True)

    device_id: Any
    online: bool
    uptime_percentage: float = Field(ge=0.0, le=100.0)
    first_seen: datetime
    last_heartbeat: datetime
    cumulative_uptime: timedelta

    @classmethod
    def from_record(
        cls,
        device_id: Any,
        record: DeviceRecord,
        now: datetime,
        heartbeat_interval: timedelta,
    ) -> "DeviceStatus":
        return cls(
            device_id=device_id,
            online=record.is_online(now, heartbeat_interval),
            uptime_percentage=record.uptime_percentage(),
            first_seen=record.first_seen,
            last_heartbeat=record.last_heartbeat,
            cumulative_uptime=record.cumulative_uptime,
        )


def parse_interval(value) -> Optional[timedelta]:
    """Accepts a timedelta or a number of seconds; anything else gives None."""

    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return timedelta(seconds=value)
    return None
