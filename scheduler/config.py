"""Environment-variable-based configuration for the scheduler entry points."""

from __future__ import annotations

import os
from pathlib import Path

STATUS_DB_PATH: Path = Path(
    os.environ.get("STATUS_DB_PATH", "~/.status_engine/athletes.db")
).expanduser()
NIGHTLY_HOUR: int = int(os.environ.get("SCHEDULER_HOUR", "3"))
NIGHTLY_MINUTE: int = int(os.environ.get("SCHEDULER_MINUTE", "0"))

BACKFILL_FORCE: bool = os.environ.get("BACKFILL_FORCE", "").lower() in ("1", "true", "yes")
BACKFILL_USER_LIMIT: int = int(os.environ.get("BACKFILL_USER_LIMIT", "0"))
BACKFILL_WORKOUT_LIMIT: int = int(os.environ.get("BACKFILL_WORKOUT_LIMIT", "0"))
BACKFILL_CONCURRENCY: int = int(os.environ.get("BACKFILL_CONCURRENCY", "10"))
