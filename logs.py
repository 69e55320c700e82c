# ─────────────────────────────────────────────────────────────────
# logs.py — Logging Setup
#
# Every module creates its own named logger:
#     logger = logging.getLogger("tracker")
# This file sets the shared format and level for all of them.
#
# %(asctime)s    → timestamp e.g. "2026-03-01 10:34:22"
# %(levelname)s  → severity e.g. "INFO", "WARNING"
# %(name)s       → which logger sent this e.g. "tracker"
# %(message)s    → the actual message
# ─────────────────────────────────────────────────────────────────

import logging

LOG_FORMAT = "%(asctime)s — %(levelname)s — [%(name)s] — %(message)s"


def configure_logging(level="INFO"):
    """
    Applies the project log format to the root logger.

    `level` may be a name ("DEBUG") or a logging constant.
    Calling it again replaces the handlers set by an earlier call.
    """

    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
