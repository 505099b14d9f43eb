"""Backfill ``lastCheckinSummary`` on workouts from their latest check-in.

Workouts checked in before the cached summary existed carry no summary, so
the weekly engine sees no signals for them. This walks every athlete's
workouts and rebuilds the cache from the most recent check-in.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from athlete_store.exceptions import AthleteStoreError
from athlete_store.repository import AthleteRepository, Document
from athlete_store.weekly_status import WeeklyStatusService
from status_engine.serialization.documents import (
    format_instant,
    parse_instant,
    summary_from_document,
    summary_to_document,
)
from status_engine.week import week_start_date

logger = logging.getLogger(__name__)


@dataclass
class BackfillReport:
    """Counters for one backfill run."""

    scanned: int = 0
    updated: int = 0
    skipped_no_checkins: int = 0
    skipped_already_has: int = 0
    errors: int = 0
    weeks_recomputed: int = 0
    recompute_errors: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def bump(self, counter: str) -> None:
        with self._lock:
            setattr(self, counter, getattr(self, counter) + 1)

    def as_dict(self) -> dict[str, int]:
        return {
            "scanned": self.scanned,
            "updated": self.updated,
            "skipped_no_checkins": self.skipped_no_checkins,
            "skipped_already_has": self.skipped_already_has,
            "errors": self.errors,
            "weeks_recomputed": self.weeks_recomputed,
            "recompute_errors": self.recompute_errors,
        }


def _backfill_workout(
    repository: AthleteRepository,
    athlete_id: str,
    workout: Document,
    force: bool,
    report: BackfillReport,
) -> bool:
    """Rebuild one workout's summary. Returns True when the workout was updated."""
    workout_id = workout["id"]
    try:
        if workout.get("lastCheckinSummary") is not None and not force:
            report.bump("skipped_already_has")
            return False

        checkin = repository.latest_checkin(athlete_id, workout_id)
        if checkin is None:
            report.bump("skipped_no_checkins")
            return False

        summary = summary_from_document(checkin)
        repository.update_workout(
            athlete_id,
            workout_id,
            {
                "lastCheckinSummary": summary_to_document(summary),
                "lastCheckinAt": format_instant(parse_instant(checkin["completedAt"])),
            },
        )
        report.bump("updated")
        return True
    except Exception:
        report.bump("errors")
        logger.exception("Backfill failed for athlete=%s workout=%s", athlete_id, workout_id)
        return False


def backfill_checkin_summaries(
    repository: AthleteRepository,
    force: bool = False,
    athlete_limit: int = 0,
    workout_limit: int = 0,
    concurrency: int = 10,
    status_service: WeeklyStatusService | None = None,
) -> BackfillReport:
    """Rebuild cached check-in summaries for every athlete's workouts.

    Args:
        repository: Store to read and update.
        force: Rewrite summaries that already exist.
        athlete_limit: Process at most this many athletes (0 = all).
        workout_limit: Process at most this many workouts per athlete (0 = all).
        concurrency: Workouts processed in parallel per athlete.
        status_service: When given, every week with an updated workout is
            recomputed afterwards.

    Returns:
        A BackfillReport. Per-workout failures and failed week recomputes are
        counted, not raised.
    """
    report = BackfillReport()
    workers = max(1, concurrency)
    logger.info(
        "Backfill starting (force=%s, athlete_limit=%s, workout_limit=%s, concurrency=%d)",
        force,
        athlete_limit or "all",
        workout_limit or "all",
        workers,
    )

    for athlete_id in repository.list_athlete_ids(athlete_limit):
        workouts = repository.list_all_workouts(athlete_id, workout_limit)
        report.scanned += len(workouts)
        logger.info("Athlete %s: %d workouts", athlete_id, len(workouts))

        with ThreadPoolExecutor(max_workers=workers) as pool:
            updated = list(
                pool.map(
                    lambda w: _backfill_workout(repository, athlete_id, w, force, report),
                    workouts,
                )
            )

        if status_service is None:
            continue

        weeks = set()
        for workout, was_updated in zip(workouts, updated):
            if not was_updated:
                continue
            try:
                weeks.add(week_start_date(parse_instant(workout["date"], status_service.tz), status_service.tz))
            except (KeyError, ValueError):
                logger.warning("Workout %s has no usable date; week not recomputed", workout["id"])

        for monday in sorted(weeks):
            try:
                status_service.recompute(athlete_id, monday)
            except AthleteStoreError:
                report.recompute_errors += 1
                logger.exception("Recompute failed for athlete=%s week=%s", athlete_id, monday)
                continue
            report.weeks_recomputed += 1

    logger.info("Backfill done: %s", report.as_dict())
    return report
