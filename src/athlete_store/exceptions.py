"""Custom exception hierarchy for the athlete store."""

from __future__ import annotations


class AthleteStoreError(Exception):
    """Base exception for all athlete_store errors."""


class AthleteNotFoundError(AthleteStoreError):
    """The athlete has no profile record."""

    def __init__(self, athlete_id: str) -> None:
        super().__init__(f"Athlete {athlete_id!r} has no profile")
        self.athlete_id = athlete_id


class WorkoutNotFoundError(AthleteStoreError):
    """The workout does not exist for this athlete."""

    def __init__(self, athlete_id: str, workout_id: str) -> None:
        super().__init__(f"Workout {workout_id!r} not found for athlete {athlete_id!r}")
        self.athlete_id = athlete_id
        self.workout_id = workout_id


class PersistenceError(AthleteStoreError):
    """The storage backend failed to read or write."""
