# ─────────────────────────────────────────────────────────────────
# errors.py — Exception Types
#
# Two things can go wrong in this project:
#   1. The tracker is built with a bad heartbeat interval
#      → InvalidConfiguration (raised once, at construction)
#   2. A heartbeat arrives without a device id or timestamp
#      → InvalidArgument (raised by record_heartbeat only)
#
# Every query path (is_device_online, get_uptime_percentage, ...)
# answers unknown devices with False / None instead of raising.
# ─────────────────────────────────────────────────────────────────


class UptimeError(Exception):
    """Base class for every error raised by the uptime tracker."""


class InvalidConfiguration(UptimeError, ValueError):
    """The heartbeat interval is missing, zero, negative or not a duration."""


class InvalidArgument(UptimeError, ValueError):
    """A heartbeat was recorded without a usable device id or timestamp."""
