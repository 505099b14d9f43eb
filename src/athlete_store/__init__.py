"""Athlete data store — workouts, check-ins and the weekly status projections."""

from athlete_store.backfill import BackfillReport, backfill_checkin_summaries
from athlete_store.checkins import CheckinService
from athlete_store.exceptions import (
    AthleteNotFoundError,
    AthleteStoreError,
    PersistenceError,
    WorkoutNotFoundError,
)
from athlete_store.memory import InMemoryRepository
from athlete_store.repository import AthleteRepository
from athlete_store.sqlite import SQLiteRepository
from athlete_store.weekly_status import WeeklyStatusService

__all__ = [
    "AthleteNotFoundError",
    "AthleteRepository",
    "AthleteStoreError",
    "BackfillReport",
    "CheckinService",
    "InMemoryRepository",
    "PersistenceError",
    "SQLiteRepository",
    "WeeklyStatusService",
    "WorkoutNotFoundError",
    "backfill_checkin_summaries",
]
