"""Storage contract for athletes, workouts, check-ins and weekly status.

Repositories exchange plain JSON-compatible documents (see
``status_engine.serialization``). Every returned document is a copy; callers
may mutate it freely.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

Document = dict[str, Any]


class AthleteRepository(ABC):
    """Abstract athlete data store.

    Layout mirrors the coaching app:
        athlete profile                  (weeklyAutoStatus is one sub-tree)
        athlete -> workouts/{id}         (date, status, lastCheckinSummary...)
        athlete -> workouts/{id}/checkins
        athlete -> weeklyHistory/{weekKey}
    """

    # -- Athletes ----------------------------------------------------------

    @abstractmethod
    def create_athlete(self, athlete_id: str, profile: Document) -> None:
        """Create or replace an athlete profile."""

    @abstractmethod
    def get_profile(self, athlete_id: str) -> Document | None:
        """Profile document including ``weeklyAutoStatus`` when set, or None."""

    @abstractmethod
    def list_athlete_ids(self, limit: int = 0) -> list[str]:
        """All athlete ids, sorted. ``limit=0`` means no limit."""

    # -- Workouts ----------------------------------------------------------

    @abstractmethod
    def save_workout(self, athlete_id: str, workout: Document) -> None:
        """Create or replace a workout document; ``workout["id"]`` is required."""

    @abstractmethod
    def update_workout(self, athlete_id: str, workout_id: str, fields: Document) -> Document:
        """Merge *fields* into an existing workout and return the result.

        Raises:
            WorkoutNotFoundError: no such workout.
        """

    @abstractmethod
    def get_workout(self, athlete_id: str, workout_id: str) -> Document | None:
        ...

    @abstractmethod
    def list_workouts(self, athlete_id: str, start: datetime, end: datetime) -> list[Document]:
        """Workouts whose ``date`` falls in ``[start, end)``.

        A naive stored ``date`` is wall-clock time in ``start.tzinfo``, the
        zone whose calendar produced the bounds (see ``status_engine.week``).
        """

    @abstractmethod
    def list_all_workouts(self, athlete_id: str, limit: int = 0) -> list[Document]:
        """Every workout of the athlete, sorted by id. ``limit=0`` means no limit."""

    # -- Check-ins ---------------------------------------------------------

    @abstractmethod
    def add_checkin(self, athlete_id: str, workout_id: str, checkin: Document) -> str:
        """Append a check-in to a workout and return its id."""

    @abstractmethod
    def latest_checkin(self, athlete_id: str, workout_id: str) -> Document | None:
        """Most recent check-in by ``completedAt``, or None."""

    # -- Weekly status -----------------------------------------------------

    @abstractmethod
    def save_weekly_status(
        self, athlete_id: str, status: Document, history_entry: Document
    ) -> None:
        """Commit both weekly projections together.

        Replaces the profile's ``weeklyAutoStatus`` sub-tree (sibling profile
        fields untouched) and upserts ``weeklyHistory[history_entry["weekKey"]]``.
        Either both writes land or neither does.

        Raises:
            AthleteNotFoundError: the athlete has no profile.
            PersistenceError: the backend failed.
        """

    @abstractmethod
    def get_history(self, athlete_id: str, week_key: str) -> Document | None:
        ...

    @abstractmethod
    def list_history(self, athlete_id: str, limit: int = 8) -> list[Document]:
        """History entries, newest ``weekStart`` first."""
