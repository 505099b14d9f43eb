"""Nightly scheduler — recomputes the current week's status for every athlete.

A check-in recompute can lose a race with another write to the same week;
this reconciliation pass heals such weeks without waiting for the next
check-in.

Usage:
    python -m scheduler.nightly --once      # single run (for cron)
    python -m scheduler.nightly --daemon    # APScheduler loop
"""

from __future__ import annotations

import argparse
import logging

from athlete_store import (
    AthleteRepository,
    AthleteStoreError,
    SQLiteRepository,
    WeeklyStatusService,
)

from scheduler.config import NIGHTLY_HOUR, NIGHTLY_MINUTE, STATUS_DB_PATH

logger = logging.getLogger(__name__)


def nightly_job(
    repository: AthleteRepository | None = None,
    status_service: WeeklyStatusService | None = None,
) -> int:
    """Execute one reconciliation cycle.

    Returns:
        Number of athletes whose status was recomputed. Athletes that fail
        are logged and skipped.
    """
    logger.info("Starting nightly job")

    if status_service is None:
        if repository is None:
            try:
                repository = SQLiteRepository(STATUS_DB_PATH)
            except AthleteStoreError as exc:
                logger.error("Failed to open store at %s: %s", STATUS_DB_PATH, exc)
                return 0
        status_service = WeeklyStatusService(repository)

    athlete_ids = status_service.repository.list_athlete_ids()
    recomputed = 0
    for athlete_id in athlete_ids:
        try:
            status = status_service.recompute(athlete_id)
        except Exception:
            logger.exception("Recompute failed for athlete %s", athlete_id)
            continue
        recomputed += 1
        logger.info(
            "Athlete %s: %s, %s",
            athlete_id,
            status.status.label,
            status.recommendation.action.value,
        )

    logger.info("Nightly job complete: %d/%d athletes recomputed", recomputed, len(athlete_ids))
    return recomputed


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    parser = argparse.ArgumentParser(description="Weekly status nightly reconciliation")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--once", action="store_true", help="Run once and exit")
    group.add_argument("--daemon", action="store_true", help="Run as APScheduler daemon")
    args = parser.parse_args()

    if args.once:
        nightly_job()
    else:
        from apscheduler.schedulers.blocking import BlockingScheduler

        scheduler = BlockingScheduler()
        scheduler.add_job(
            nightly_job,
            "cron",
            hour=NIGHTLY_HOUR,
            minute=NIGHTLY_MINUTE,
            id="nightly_job",
        )
        logger.info(
            "Scheduler started — nightly job at %02d:%02d",
            NIGHTLY_HOUR,
            NIGHTLY_MINUTE,
        )
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info("Scheduler stopped")


if __name__ == "__main__":
    main()
