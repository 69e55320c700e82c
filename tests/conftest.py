"""Shared pytest fixtures for the uptime tracker tests."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from tracker import UptimeTracker

HEARTBEAT_INTERVAL = timedelta(minutes=5)


@pytest.fixture
def tracker():
    return UptimeTracker(HEARTBEAT_INTERVAL)


@pytest.fixture
def device_id():
    return uuid.uuid4()


@pytest.fixture
def base_time():
    return datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    # keep a developer's UPTIME_* variables and .env out of the tests
    for key in ("UPTIME_HEARTBEAT_INTERVAL", "UPTIME_LOG_LEVEL", "UPTIME_SHARD_COUNT"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
