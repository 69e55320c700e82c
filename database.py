# ─────────────────────────────────────────────────────────────────
# database.py — In-Memory Device Record Store
#
# This file owns all per-device storage. Nothing outside it
# touches the underlying dictionaries.
#
# Layout:
#   shards → a fixed list of small dictionaries, each with its own lock
#   Key    → device id (UUID, str, any hashable) e.g. "device-123"
#   Value  → DeviceRecord (frozen: first_seen, last_heartbeat,
#            cumulative_uptime)
#
# A device always lives in the same shard (hash(device_id) % shard_count).
# Heartbeats for devices in different shards never wait on each other;
# heartbeats for the same device are applied one at a time.
# ─────────────────────────────────────────────────────────────────

import logging
import threading
from typing import Callable, Dict, Hashable, List, Optional

from models import DeviceRecord

logger = logging.getLogger("database")

DEFAULT_SHARD_COUNT = 16


class _Shard:
    __slots__ = ("lock", "records")

    def __init__(self):
        self.lock = threading.Lock()
        self.records: Dict[Hashable, DeviceRecord] = {}


class DeviceStore:
    """
    Concurrency-safe map of device id → DeviceRecord.

    Every method takes at most ONE shard lock and holds it only for a
    single dictionary operation, so no call can block indefinitely.
    """

    def __init__(self, shard_count: int = DEFAULT_SHARD_COUNT):
        if shard_count < 1:
            raise ValueError("shard_count must be at least 1")
        self._shards = [_Shard() for _ in range(shard_count)]
        logger.debug(f"Device store ready with {shard_count} shards")

    def _shard_for(self, device_id: Hashable) -> _Shard:
        return self._shards[hash(device_id) % len(self._shards)]

    def get(self, device_id: Hashable) -> Optional[DeviceRecord]:
        shard = self._shard_for(device_id)
        with shard.lock:
            return shard.records.get(device_id)

    def update(
        self,
        device_id: Hashable,
        apply: Callable[[Optional[DeviceRecord]], DeviceRecord],
    ) -> Optional[DeviceRecord]:
        """
        Atomically replaces the record for `device_id` with apply(current).

        `current` is None for a device seen for the first time.
        If `apply` raises, the stored record is left untouched.
        Returns the PREVIOUS record (None if there was none).
        """

        shard = self._shard_for(device_id)
        with shard.lock:
            previous = shard.records.get(device_id)
            shard.records[device_id] = apply(previous)
            return previous

    def remove(self, device_id: Hashable) -> Optional[DeviceRecord]:
        shard = self._shard_for(device_id)
        with shard.lock:
            return shard.records.pop(device_id, None)

    def device_ids(self) -> List[Hashable]:
        ids: List[Hashable] = []
        for shard in self._shards:
            with shard.lock:
                ids.extend(shard.records)
        return ids

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.records)
        return total

    def __contains__(self, device_id: Hashable) -> bool:
        return self.get(device_id) is not None
