# ─────────────────────────────────────────────────────────────────
# tracker.py — Device Uptime Tracking
#
# Answers two questions for every device, at any instant:
#   1. Is it online right now?
#   2. What fraction of its observed lifetime has it been online?
#
# HOW IT WORKS:
#   - record_heartbeat() stores the newest timestamp per device and,
#     when the gap since the previous heartbeat is within the
#     heartbeat interval, adds that gap to the device's alive time.
#   - Online/offline is NEVER stored. It is recomputed on every query
#     from (last_heartbeat, now, heartbeat_interval).
#
# All state lives in a DeviceStore (database.py). A device is
# UNKNOWN until its first heartbeat, TRACKED afterwards, and UNKNOWN
# again once remove_device() is called. Nothing expires by itself.
# ─────────────────────────────────────────────────────────────────

import logging
from datetime import datetime, timedelta
from typing import Hashable, List, Optional

from database import DEFAULT_SHARD_COUNT, DeviceStore
from errors import InvalidArgument, InvalidConfiguration
from models import DeviceRecord, DeviceStatus, parse_interval

logger = logging.getLogger("tracker")


class UptimeTracker:
    """
    Tracks liveness and uptime percentage for a population of devices.

    Safe to share between threads: no external locking is needed.
    Heartbeats for different devices proceed independently.
    """

    def __init__(self, heartbeat_interval, shard_count: int = DEFAULT_SHARD_COUNT):
        try:
            interval = parse_interval(heartbeat_interval)
        except (ValueError, OverflowError) as exc:
            logger.warning(f"Rejected heartbeat interval: {heartbeat_interval!r}")
            raise InvalidConfiguration(f"heartbeat_interval is not a duration: {exc}") from exc

        if interval is None or interval <= timedelta(0):
            logger.warning(f"Rejected heartbeat interval: {heartbeat_interval!r}")
            raise InvalidConfiguration("heartbeat_interval must be a positive duration")

        self._heartbeat_interval = interval
        self._store = DeviceStore(shard_count)

        logger.info(f"Uptime tracker ready | heartbeat interval: {interval}")

    @property
    def heartbeat_interval(self) -> timedelta:
        return self._heartbeat_interval

    # ── WRITES ────────────────────────────────────────────────────

    def record_heartbeat(self, device_id: Hashable, timestamp: datetime) -> None:
        """
        Records one heartbeat for a device.

        Raises InvalidArgument when the device id or timestamp is missing.
        Out-of-order timestamps are accepted: last_heartbeat is simply
        overwritten and no alive time is added for that transition.
        """

        if device_id is None:
            logger.warning("Rejected heartbeat without a device id")
            raise InvalidArgument("device_id must not be None")
        if timestamp is None:
            logger.warning(f"Rejected heartbeat for '{device_id}' without a timestamp")
            raise InvalidArgument("timestamp must not be None")
        if not isinstance(timestamp, datetime):
            logger.warning(f"Rejected heartbeat for '{device_id}': {timestamp!r} is not a datetime")
            raise InvalidArgument("timestamp must be a datetime")

        interval = self._heartbeat_interval

        def apply(current: Optional[DeviceRecord]) -> DeviceRecord:
            if current is None:
                return DeviceRecord.first(timestamp)
            return current.advance(timestamp, interval)

        try:
            previous = self._store.update(device_id, apply)
        except TypeError as exc:
            # unhashable id, or naive vs aware timestamps
            logger.warning(f"Rejected heartbeat for {device_id!r}: {exc}")
            raise InvalidArgument(str(exc)) from exc

        if previous is None:
            logger.info(f"💓 First heartbeat from '{device_id}' at {timestamp.isoformat()}")
            return

        gap = timestamp - previous.last_heartbeat
        if gap < timedelta(0):
            logger.debug(f"Out-of-order heartbeat from '{device_id}' ({gap}) — not counted")
        elif gap > interval:
            logger.debug(f"Gap of {gap} for '{device_id}' exceeds {interval} — not counted")
        else:
            logger.debug(f"💓 Heartbeat: '{device_id}' | gap {gap}")

    def remove_device(self, device_id: Hashable) -> None:
        """Forgets everything about a device. Unknown ids are ignored."""

        if device_id is None:
            return
        try:
            removed = self._store.remove(device_id)
        except TypeError:
            return

        if removed is not None:
            logger.info(f"🗑️  Device '{device_id}' removed from tracking")

    # ── READS ─────────────────────────────────────────────────────

    def _record(self, device_id: Hashable) -> Optional[DeviceRecord]:
        if device_id is None:
            return None
        try:
            return self._store.get(device_id)
        except TypeError:
            # unhashable ids can never have been recorded
            return None

    def is_device_online(self, device_id: Hashable, now: datetime) -> bool:
        """
        True when `now - last_heartbeat <= heartbeat_interval`.

        Unknown devices and missing arguments are offline. A `now`
        earlier than the last heartbeat counts as online.
        """

        if now is None:
            return False
        record = self._record(device_id)
        if record is None:
            return False

        try:
            return record.is_online(now, self._heartbeat_interval)
        except TypeError:
            logger.warning(f"Cannot compare {now!r} with the last heartbeat of '{device_id}'")
            return False

    def get_uptime_percentage(self, device_id: Hashable) -> Optional[float]:
        """
        Share of the observation window (first → last heartbeat) that
        was judged alive, as a percentage in [0.0, 100.0].

        None for unknown devices. A device with a single heartbeat,
        or with no elapsed window, is at exactly 100.0.
        Time after the last heartbeat is never credited.
        """

        record = self._record(device_id)
        if record is None:
            return None
        return record.uptime_percentage()

    def get_last_heartbeat(self, device_id: Hashable) -> Optional[datetime]:
        record = self._record(device_id)
        return record.last_heartbeat if record else None

    def get_first_seen(self, device_id: Hashable) -> Optional[datetime]:
        record = self._record(device_id)
        return record.first_seen if record else None

    def get_cumulative_uptime(self, device_id: Hashable) -> Optional[timedelta]:
        record = self._record(device_id)
        return record.cumulative_uptime if record else None

    def get_device_status(self, device_id: Hashable, now: datetime) -> Optional[DeviceStatus]:
        """
        Full snapshot of one device, taken from a single record read
        so every field describes the same moment.
        """

        if now is None:
            return None
        record = self._record(device_id)
        if record is None:
            return None

        try:
            return DeviceStatus.from_record(device_id, record, now, self._heartbeat_interval)
        except TypeError:
            logger.warning(f"Cannot compare {now!r} with the last heartbeat of '{device_id}'")
            return None

    def list_devices(self) -> List[Hashable]:
        return self._store.device_ids()

    def get_tracked_device_count(self) -> int:
        return len(self._store)
