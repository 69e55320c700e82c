# ─────────────────────────────────────────────────────────────────
# main.py — Application Setup
#
# Wires configuration and logging together and hands back a ready
# UptimeTracker. Callers that deliver heartbeats (an MQTT consumer,
# an HTTP handler, a queue worker) build one tracker here and share it.
#
#     from main import create_tracker
#     tracker = create_tracker()
#     tracker.record_heartbeat(device_id, datetime.now(timezone.utc))
# ─────────────────────────────────────────────────────────────────

import logging
from typing import Optional

from pydantic import ValidationError

from config import TrackerSettings
from errors import InvalidConfiguration
from logs import configure_logging
from tracker import UptimeTracker

logger = logging.getLogger("main")


def load_settings() -> TrackerSettings:
    """Reads TrackerSettings from the environment / .env file."""

    try:
        return TrackerSettings()
    except ValidationError as exc:
        raise InvalidConfiguration(str(exc)) from exc


def create_tracker(settings: Optional[TrackerSettings] = None) -> UptimeTracker:
    if settings is None:
        settings = load_settings()

    configure_logging(settings.log_level)
    logger.info(
        f"✅ Starting uptime tracker | interval: {settings.heartbeat_interval} | shards: {settings.shard_count}"
    )

    return UptimeTracker(settings.heartbeat_interval, shard_count=settings.shard_count)
