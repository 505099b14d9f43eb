"""One-off backfill of cached check-in summaries on workouts.

Usage:
    python -m scheduler.backfill                 # fill missing summaries
    python -m scheduler.backfill --force         # rebuild every summary
    python -m scheduler.backfill --recompute     # also refresh touched weeks
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from athlete_store import SQLiteRepository, WeeklyStatusService, backfill_checkin_summaries

from scheduler.config import (
    BACKFILL_CONCURRENCY,
    BACKFILL_FORCE,
    BACKFILL_USER_LIMIT,
    BACKFILL_WORKOUT_LIMIT,
    STATUS_DB_PATH,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Backfill lastCheckinSummary on workouts")
    parser.add_argument("--db", type=Path, default=STATUS_DB_PATH, help="SQLite database path")
    parser.add_argument(
        "--force",
        action="store_true",
        default=BACKFILL_FORCE,
        help="Rewrite summaries that already exist",
    )
    parser.add_argument(
        "--athlete-limit",
        type=int,
        default=BACKFILL_USER_LIMIT,
        help="Process at most N athletes (0 = all)",
    )
    parser.add_argument(
        "--workout-limit",
        type=int,
        default=BACKFILL_WORKOUT_LIMIT,
        help="Process at most N workouts per athlete (0 = all)",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=BACKFILL_CONCURRENCY,
        help="Workouts processed in parallel",
    )
    parser.add_argument(
        "--recompute",
        action="store_true",
        help="Recompute the weekly status of every week that changed",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    args = build_parser().parse_args(argv)

    repository = SQLiteRepository(args.db)
    report = backfill_checkin_summaries(
        repository,
        force=args.force,
        athlete_limit=args.athlete_limit,
        workout_limit=args.workout_limit,
        concurrency=args.concurrency,
        status_service=WeeklyStatusService(repository) if args.recompute else None,
    )
    print(
        f"scanned={report.scanned} updated={report.updated} "
        f"skipped_no_checkins={report.skipped_no_checkins} "
        f"skipped_already_has={report.skipped_already_has} "
        f"errors={report.errors} weeks_recomputed={report.weeks_recomputed} "
        f"recompute_errors={report.recompute_errors}"
    )
    return 1 if report.errors or report.recompute_errors else 0


if __name__ == "__main__":
    sys.exit(main())
