"""Check-in and skip actions — the two writes that trigger a weekly recompute."""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Any

from athlete_store.exceptions import AthleteStoreError, WorkoutNotFoundError
from athlete_store.repository import AthleteRepository
from athlete_store.weekly_status import WeeklyStatusService
from status_engine.models.checkin import CheckIn
from status_engine.models.enums import SkipReason, WorkoutStatus
from status_engine.models.weekly import WeeklyAutoStatus
from status_engine.serialization.documents import (
    checkin_from_document,
    checkin_to_document,
    format_instant,
    parse_instant,
    summary_to_document,
)

logger = logging.getLogger(__name__)


class CheckinService:
    """Records check-ins and skips, then refreshes the workout's week.

    The primary write is committed first. The recompute that follows is
    best effort: if it fails the error is logged and the primary write
    stands, so the recompute can simply be retried later.
    """

    def __init__(self, repository: AthleteRepository, status_service: WeeklyStatusService) -> None:
        self.repository = repository
        self.status_service = status_service

    def save_checkin(self, athlete_id: str, workout_id: str, checkin: CheckIn) -> str:
        """Store a check-in, refresh the workout's cached summary and recompute its week.

        Returns:
            The new check-in id.

        Raises:
            WorkoutNotFoundError: the workout does not exist; nothing is written.
        """
        if not athlete_id:
            raise ValueError("save_checkin: athlete_id is missing")
        if not workout_id:
            raise ValueError("save_checkin: workout_id is missing")
        if self.repository.get_workout(athlete_id, workout_id) is None:
            raise WorkoutNotFoundError(athlete_id, workout_id)

        now = self.status_service.clock()
        if checkin.completed_at is None:
            checkin = dataclasses.replace(checkin, completed_at=now)

        checkin_id = self.repository.add_checkin(
            athlete_id, workout_id, checkin_to_document(checkin)
        )
        workout = self.repository.update_workout(
            athlete_id,
            workout_id,
            {
                "status": checkin.status.value,
                "lastCheckinSummary": summary_to_document(checkin.to_summary()),
                "lastCheckinAt": format_instant(checkin.completed_at),  # type: ignore[arg-type]
                "updatedAt": format_instant(now),
            },
        )
        logger.info(
            "Saved check-in %s for workout %s (athlete %s)", checkin_id, workout_id, athlete_id
        )

        self._recompute_best_effort(athlete_id, workout)
        return checkin_id

    def mark_workout_skipped(
        self,
        athlete_id: str,
        workout_id: str,
        reason: SkipReason,
        note: str | None = None,
    ) -> None:
        """Mark a workout skipped with a reason and optional note, then recompute its week.

        Raises:
            WorkoutNotFoundError: the workout does not exist; nothing is written.
        """
        if not athlete_id:
            raise ValueError("mark_workout_skipped: athlete_id is missing")
        if not workout_id:
            raise ValueError("mark_workout_skipped: workout_id is missing")

        trimmed = note.strip() if note else ""
        workout = self.repository.update_workout(
            athlete_id,
            workout_id,
            {
                "status": WorkoutStatus.SKIPPED.value,
                "skippedReason": SkipReason(reason).value,
                "skippedNote": trimmed or None,
                "updatedAt": format_instant(self.status_service.clock()),
            },
        )
        logger.info(
            "Marked workout %s skipped (%s) for athlete %s",
            workout_id,
            SkipReason(reason).value,
            athlete_id,
        )

        self._recompute_best_effort(athlete_id, workout)

    def latest_checkin(self, athlete_id: str, workout_id: str) -> CheckIn | None:
        """Most recent check-in for a workout, or None."""
        if not athlete_id or not workout_id:
            return None
        doc = self.repository.latest_checkin(athlete_id, workout_id)
        return checkin_from_document(doc) if doc else None

    def _recompute_best_effort(
        self, athlete_id: str, workout: dict[str, Any]
    ) -> WeeklyAutoStatus | None:
        reference: datetime | None
        try:
            reference = parse_instant(workout["date"], self.status_service.tz)
        except (KeyError, ValueError):
            logger.warning(
                "Workout %s has no usable date; recomputing the current week",
                workout.get("id"),
            )
            reference = None

        try:
            return self.status_service.recompute(athlete_id, reference)
        except AthleteStoreError:
            logger.exception(
                "Weekly status recompute failed for athlete %s after workout %s",
                athlete_id,
                workout.get("id"),
            )
            return None
