"""Weekly status store — the only writer of the current status and weekly history."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import date, datetime, timezone, tzinfo
from typing import Callable, Iterator

from athlete_store.exceptions import AthleteNotFoundError
from athlete_store.repository import AthleteRepository
from status_engine.engine import StatusEngine
from status_engine.models.weekly import WeeklyAutoStatus, WeeklyHistoryEntry
from status_engine.serialization.documents import (
    history_entry_from_document,
    history_entry_to_document,
    status_from_document,
    status_to_document,
)
from status_engine.week import week_bounds

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WeeklyStatusService:
    """Recomputes and persists an athlete's weekly status.

    Each recompute reads the week's workouts, evaluates them with the
    StatusEngine and commits the current status and the week's history
    entry together. Recomputes for the same athlete are serialized; the
    result depends only on the week's workouts, so a recompute is safe to
    retry.

    One lock is kept per athlete id seen and never released, so memory grows
    with the athlete count. That is a few bytes per athlete; a long-lived
    service over millions of athletes would want an evicting map instead.
    """

    def __init__(
        self,
        repository: AthleteRepository,
        engine: StatusEngine | None = None,
        clock: Callable[[], datetime] = _utc_now,
        tz: tzinfo | None = None,
    ) -> None:
        self.repository = repository
        self.tz = tz
        self.engine = engine or StatusEngine(tz=tz)
        self.clock = clock
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _athlete_lock(self, athlete_id: str) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(athlete_id, threading.Lock())
        with lock:
            yield

    def recompute(
        self, athlete_id: str, reference: date | datetime | None = None
    ) -> WeeklyAutoStatus:
        """Recompute the week containing *reference* (default: now).

        Raises:
            AthleteNotFoundError: the athlete has no profile; nothing is written.
            PersistenceError: the store failed; no half-write is left behind.
        """
        reference = reference if reference is not None else self.clock()
        start, end = week_bounds(reference, self.tz)

        with self._athlete_lock(athlete_id):
            if self.repository.get_profile(athlete_id) is None:
                raise AthleteNotFoundError(athlete_id)

            workouts = self.repository.list_workouts(athlete_id, start, end)
            status, trace = self.engine.evaluate_documents(
                workouts, start.date(), updated_at=self.clock()
            )
            entry = WeeklyHistoryEntry.from_status(status)
            self.repository.save_weekly_status(
                athlete_id,
                status_to_document(status),
                history_entry_to_document(entry),
            )

        logger.info(
            "Weekly status for %s week %s: %s (%s), %d workouts, triggers=%s",
            athlete_id,
            entry.week_key,
            status.status.label,
            status.recommendation.action.value,
            status.stats.total,
            list(status.recommendation_triggers),
        )
        logger.debug("Classification for %s: %s", athlete_id, trace.merge_notes)
        return status

    def current_status(self, athlete_id: str) -> WeeklyAutoStatus | None:
        """Current weekly status from the athlete profile, None if never computed.

        Raises:
            AthleteNotFoundError: the athlete has no profile.
        """
        profile = self.repository.get_profile(athlete_id)
        if profile is None:
            raise AthleteNotFoundError(athlete_id)
        doc = profile.get("weeklyAutoStatus")
        return status_from_document(doc) if doc else None

    def history(self, athlete_id: str, limit: int = 8) -> list[WeeklyHistoryEntry]:
        """Most recent history entries, newest week first."""
        return [
            history_entry_from_document(doc)
            for doc in self.repository.list_history(athlete_id, limit)
        ]
