"""In-process athlete repository, used by tests and single-process tools."""

from __future__ import annotations

import copy
import itertools
import threading
from datetime import datetime

from athlete_store.exceptions import AthleteNotFoundError, WorkoutNotFoundError
from athlete_store.repository import AthleteRepository, Document
from status_engine.serialization.documents import parse_instant


class InMemoryRepository(AthleteRepository):
    """Dict-backed repository. All access is serialized by one re-entrant lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._profiles: dict[str, Document] = {}
        self._workouts: dict[str, dict[str, Document]] = {}
        self._checkins: dict[tuple[str, str], list[Document]] = {}
        self._history: dict[str, dict[str, Document]] = {}
        self._checkin_ids = itertools.count(1)

    # -- Athletes ----------------------------------------------------------

    def create_athlete(self, athlete_id: str, profile: Document) -> None:
        with self._lock:
            self._profiles[athlete_id] = copy.deepcopy(profile)

    def get_profile(self, athlete_id: str) -> Document | None:
        with self._lock:
            profile = self._profiles.get(athlete_id)
            return copy.deepcopy(profile) if profile is not None else None

    def list_athlete_ids(self, limit: int = 0) -> list[str]:
        with self._lock:
            ids = sorted(self._profiles)
        return ids[:limit] if limit > 0 else ids

    # -- Workouts ----------------------------------------------------------

    def save_workout(self, athlete_id: str, workout: Document) -> None:
        if not workout.get("id"):
            raise ValueError("Workout document needs an 'id'")
        with self._lock:
            self._workouts.setdefault(athlete_id, {})[workout["id"]] = copy.deepcopy(workout)

    def update_workout(self, athlete_id: str, workout_id: str, fields: Document) -> Document:
        with self._lock:
            workout = self._workouts.get(athlete_id, {}).get(workout_id)
            if workout is None:
                raise WorkoutNotFoundError(athlete_id, workout_id)
            workout.update(copy.deepcopy(fields))
            return copy.deepcopy(workout)

    def get_workout(self, athlete_id: str, workout_id: str) -> Document | None:
        with self._lock:
            workout = self._workouts.get(athlete_id, {}).get(workout_id)
            return copy.deepcopy(workout) if workout is not None else None

    def list_workouts(self, athlete_id: str, start: datetime, end: datetime) -> list[Document]:
        with self._lock:
            workouts = list(self._workouts.get(athlete_id, {}).values())
            selected = []
            for workout in workouts:
                raw_date = workout.get("date")
                if raw_date is None:
                    continue
                try:
                    instant = parse_instant(raw_date, start.tzinfo)
                except ValueError:
                    continue
                if start <= instant < end:
                    selected.append(copy.deepcopy(workout))
        return selected

    def list_all_workouts(self, athlete_id: str, limit: int = 0) -> list[Document]:
        with self._lock:
            workouts = [
                copy.deepcopy(w)
                for _, w in sorted(self._workouts.get(athlete_id, {}).items())
            ]
        return workouts[:limit] if limit > 0 else workouts

    # -- Check-ins ---------------------------------------------------------

    def add_checkin(self, athlete_id: str, workout_id: str, checkin: Document) -> str:
        with self._lock:
            checkin_id = str(next(self._checkin_ids))
            stored = {**copy.deepcopy(checkin), "id": checkin_id}
            self._checkins.setdefault((athlete_id, workout_id), []).append(stored)
            return checkin_id

    def latest_checkin(self, athlete_id: str, workout_id: str) -> Document | None:
        with self._lock:
            checkins = self._checkins.get((athlete_id, workout_id), [])
            dated = [c for c in checkins if c.get("completedAt")]
            if not dated:
                return None
            # max() keeps the first of equal keys; reversed() makes the newest insert win
            latest = max(reversed(dated), key=lambda c: parse_instant(c["completedAt"]))
            return copy.deepcopy(latest)

    # -- Weekly status -----------------------------------------------------

    def save_weekly_status(
        self, athlete_id: str, status: Document, history_entry: Document
    ) -> None:
        status_copy = copy.deepcopy(status)
        entry_copy = copy.deepcopy(history_entry)
        with self._lock:
            profile = self._profiles.get(athlete_id)
            if profile is None:
                raise AthleteNotFoundError(athlete_id)
            profile["weeklyAutoStatus"] = status_copy
            self._history.setdefault(athlete_id, {})[entry_copy["weekKey"]] = entry_copy

    def get_history(self, athlete_id: str, week_key: str) -> Document | None:
        with self._lock:
            entry = self._history.get(athlete_id, {}).get(week_key)
            return copy.deepcopy(entry) if entry is not None else None

    def list_history(self, athlete_id: str, limit: int = 8) -> list[Document]:
        with self._lock:
            entries = sorted(
                self._history.get(athlete_id, {}).values(),
                key=lambda e: e["weekStart"],
                reverse=True,
            )
            return copy.deepcopy(entries[:limit] if limit > 0 else entries)
