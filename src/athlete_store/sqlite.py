"""SQLite-backed athlete repository.

Documents are stored as JSON text next to the few columns that need to be
queried (workout date, history week start). Both weekly projections are
written in one transaction.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, tzinfo
from pathlib import Path
from typing import Iterator

from athlete_store.exceptions import (
    AthleteNotFoundError,
    PersistenceError,
    WorkoutNotFoundError,
)
from athlete_store.repository import AthleteRepository, Document
from status_engine.serialization.documents import format_instant, parse_instant
from status_engine.week import to_local

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS athletes (
    id TEXT PRIMARY KEY,
    profile TEXT NOT NULL,
    weekly_auto_status TEXT
);
CREATE TABLE IF NOT EXISTS workouts (
    athlete_id TEXT NOT NULL,
    id TEXT NOT NULL,
    date_utc TEXT,
    date_local TEXT,
    document TEXT NOT NULL,
    PRIMARY KEY (athlete_id, id)
);
CREATE INDEX IF NOT EXISTS idx_workouts_date ON workouts (athlete_id, date_utc);
CREATE TABLE IF NOT EXISTS checkins (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    athlete_id TEXT NOT NULL,
    workout_id TEXT NOT NULL,
    completed_at TEXT,
    document TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_checkins_workout ON checkins (athlete_id, workout_id, completed_at);
CREATE TABLE IF NOT EXISTS weekly_history (
    athlete_id TEXT NOT NULL,
    week_key TEXT NOT NULL,
    week_start TEXT NOT NULL,
    document TEXT NOT NULL,
    PRIMARY KEY (athlete_id, week_key)
);
"""


def _dumps(doc: Document) -> str:
    return json.dumps(doc, ensure_ascii=False, sort_keys=True)


def _indexed_instant(value: object) -> str | None:
    """Normalized UTC string for an instant column, None when unparseable."""
    if value is None:
        return None
    try:
        return format_instant(parse_instant(value))
    except ValueError:
        logger.warning("Storing check-in with unparseable completedAt %r", value)
        return None


def _indexed_date(value: object) -> tuple[str | None, str | None]:
    """``(date_utc, date_local)`` columns for a workout date.

    Aware dates are indexed as UTC. Naive dates have no zone of their own, so
    only their wall-clock text is indexed and each query reads it in the zone
    of its own bounds.
    """
    if value is None:
        return None, None
    try:
        instant = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    except (TypeError, ValueError):
        logger.warning("Storing workout with unparseable date %r", value)
        return None, None
    if instant.tzinfo is None:
        return None, instant.isoformat(timespec="microseconds")
    return format_instant(instant), None


def _wall_clock(instant: datetime, tz: tzinfo | None) -> str:
    return to_local(instant, tz).replace(tzinfo=None).isoformat(timespec="microseconds")


class SQLiteRepository(AthleteRepository):
    """Repository over a single SQLite database file.

    A new connection is opened per operation, so one instance can be shared
    across threads. ``":memory:"`` is not supported because every
    connection would see a different database.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._transaction() as conn:
            conn.executescript(_SCHEMA)
            columns = {row[1] for row in conn.execute("PRAGMA table_info(workouts)")}
            if "date_local" not in columns:
                conn.execute("ALTER TABLE workouts ADD COLUMN date_local TEXT")
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_workouts_local ON workouts (athlete_id, date_local)"
            )

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Connection whose statements commit together or roll back together."""
        try:
            conn = sqlite3.connect(self._path, timeout=10.0)
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot open {self._path}: {exc}") from exc
        try:
            with conn:
                yield conn
        except sqlite3.Error as exc:
            raise PersistenceError(str(exc)) from exc
        finally:
            conn.close()

    # -- Athletes ----------------------------------------------------------

    def create_athlete(self, athlete_id: str, profile: Document) -> None:
        fields = {k: v for k, v in profile.items() if k != "weeklyAutoStatus"}
        status = profile.get("weeklyAutoStatus")
        with self._transaction() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO athletes (id, profile, weekly_auto_status) "
                "VALUES (?, ?, ?)",
                (athlete_id, _dumps(fields), _dumps(status) if status else None),
            )

    def get_profile(self, athlete_id: str) -> Document | None:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT profile, weekly_auto_status FROM athletes WHERE id = ?",
                (athlete_id,),
            ).fetchone()
        if row is None:
            return None
        profile = json.loads(row[0])
        if row[1] is not None:
            profile["weeklyAutoStatus"] = json.loads(row[1])
        return profile

    def list_athlete_ids(self, limit: int = 0) -> list[str]:
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT id FROM athletes ORDER BY id LIMIT ?", (limit if limit > 0 else -1,)
            ).fetchall()
        return [r[0] for r in rows]

    # -- Workouts ----------------------------------------------------------

    def save_workout(self, athlete_id: str, workout: Document) -> None:
        if not workout.get("id"):
            raise ValueError("Workout document needs an 'id'")
        date_utc, date_local = _indexed_date(workout.get("date"))
        with self._transaction() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO workouts (athlete_id, id, date_utc, date_local, document) "
                "VALUES (?, ?, ?, ?, ?)",
                (athlete_id, workout["id"], date_utc, date_local, _dumps(workout)),
            )

    def update_workout(self, athlete_id: str, workout_id: str, fields: Document) -> Document:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT document FROM workouts WHERE athlete_id = ? AND id = ?",
                (athlete_id, workout_id),
            ).fetchone()
            if row is None:
                raise WorkoutNotFoundError(athlete_id, workout_id)
            workout = {**json.loads(row[0]), **fields}
            date_utc, date_local = _indexed_date(workout.get("date"))
            conn.execute(
                "UPDATE workouts SET date_utc = ?, date_local = ?, document = ? "
                "WHERE athlete_id = ? AND id = ?",
                (date_utc, date_local, _dumps(workout), athlete_id, workout_id),
            )
        return workout

    def get_workout(self, athlete_id: str, workout_id: str) -> Document | None:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT document FROM workouts WHERE athlete_id = ? AND id = ?",
                (athlete_id, workout_id),
            ).fetchone()
        return json.loads(row[0]) if row else None

    def list_workouts(self, athlete_id: str, start: datetime, end: datetime) -> list[Document]:
        tz = start.tzinfo
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT document FROM workouts WHERE athlete_id = ? AND ("
                "(date_utc >= ? AND date_utc < ?) OR (date_local >= ? AND date_local < ?)"
                ") ORDER BY COALESCE(date_utc, date_local), id",
                (
                    athlete_id,
                    format_instant(start),
                    format_instant(end),
                    _wall_clock(start, tz),
                    _wall_clock(end, tz),
                ),
            ).fetchall()
        return [json.loads(r[0]) for r in rows]

    def list_all_workouts(self, athlete_id: str, limit: int = 0) -> list[Document]:
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT document FROM workouts WHERE athlete_id = ? ORDER BY id LIMIT ?",
                (athlete_id, limit if limit > 0 else -1),
            ).fetchall()
        return [json.loads(r[0]) for r in rows]

    # -- Check-ins ---------------------------------------------------------

    def add_checkin(self, athlete_id: str, workout_id: str, checkin: Document) -> str:
        with self._transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO checkins (athlete_id, workout_id, completed_at, document) "
                "VALUES (?, ?, ?, ?)",
                (athlete_id, workout_id, _indexed_instant(checkin.get("completedAt")), _dumps(checkin)),
            )
            checkin_id = str(cursor.lastrowid)
        return checkin_id

    def latest_checkin(self, athlete_id: str, workout_id: str) -> Document | None:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT id, document FROM checkins "
                "WHERE athlete_id = ? AND workout_id = ? AND completed_at IS NOT NULL "
                "ORDER BY completed_at DESC, id DESC LIMIT 1",
                (athlete_id, workout_id),
            ).fetchone()
        if row is None:
            return None
        return {**json.loads(row[1]), "id": str(row[0])}

    # -- Weekly status -----------------------------------------------------

    def save_weekly_status(
        self, athlete_id: str, status: Document, history_entry: Document
    ) -> None:
        with self._transaction() as conn:
            cursor = conn.execute(
                "UPDATE athletes SET weekly_auto_status = ? WHERE id = ?",
                (_dumps(status), athlete_id),
            )
            if cursor.rowcount == 0:
                raise AthleteNotFoundError(athlete_id)
            conn.execute(
                "INSERT INTO weekly_history (athlete_id, week_key, week_start, document) "
                "VALUES (?, ?, ?, ?) "
                "ON CONFLICT (athlete_id, week_key) DO UPDATE SET "
                "week_start = excluded.week_start, document = excluded.document",
                (
                    athlete_id,
                    history_entry["weekKey"],
                    history_entry["weekStart"],
                    _dumps(history_entry),
                ),
            )

    def get_history(self, athlete_id: str, week_key: str) -> Document | None:
        with self._transaction() as conn:
            row = conn.execute(
                "SELECT document FROM weekly_history WHERE athlete_id = ? AND week_key = ?",
                (athlete_id, week_key),
            ).fetchone()
        return json.loads(row[0]) if row else None

    def list_history(self, athlete_id: str, limit: int = 8) -> list[Document]:
        with self._transaction() as conn:
            rows = conn.execute(
                "SELECT document FROM weekly_history WHERE athlete_id = ? "
                "ORDER BY week_start DESC LIMIT ?",
                (athlete_id, limit if limit > 0 else -1),
            ).fetchall()
        return [json.loads(r[0]) for r in rows]
