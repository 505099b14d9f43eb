"""Repository contract, run against both the in-memory and the SQLite store."""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest
from conftest import at, workout_doc

from athlete_store.exceptions import AthleteNotFoundError, WorkoutNotFoundError
from athlete_store.memory import InMemoryRepository
from athlete_store.repository import AthleteRepository
from athlete_store.sqlite import SQLiteRepository

UTC = timezone.utc
MADRID = ZoneInfo("Europe/Madrid")


@pytest.fixture(params=["memory", "sqlite"])
def repo(request, tmp_path) -> AthleteRepository:
    if request.param == "memory":
        store: AthleteRepository = InMemoryRepository()
    else:
        store = SQLiteRepository(tmp_path / "athletes.db")
    store.create_athlete("ath-1", {"name": "Lucía"})
    return store


def _history(week_key: str, status: str = "green") -> dict:
    return {"weekKey": week_key, "weekStart": week_key, "status": status}


class TestAthletes:
    def test_profile_round_trip(self, repo: AthleteRepository) -> None:
        assert repo.get_profile("ath-1") == {"name": "Lucía"}

    def test_unknown_profile(self, repo: AthleteRepository) -> None:
        assert repo.get_profile("nobody") is None

    def test_list_ids_sorted_and_limited(self, repo: AthleteRepository) -> None:
        repo.create_athlete("ath-0", {})
        repo.create_athlete("ath-2", {})
        assert repo.list_athlete_ids() == ["ath-0", "ath-1", "ath-2"]
        assert repo.list_athlete_ids(limit=2) == ["ath-0", "ath-1"]


class TestWorkouts:
    def test_save_and_get(self, repo: AthleteRepository) -> None:
        repo.save_workout("ath-1", workout_doc("w1", day=1))
        assert repo.get_workout("ath-1", "w1")["status"] == "planned"

    def test_save_requires_id(self, repo: AthleteRepository) -> None:
        with pytest.raises(ValueError):
            repo.save_workout("ath-1", {"date": at(0).isoformat()})

    def test_update_merges_fields(self, repo: AthleteRepository) -> None:
        repo.save_workout("ath-1", workout_doc("w1", sport="run"))
        merged = repo.update_workout("ath-1", "w1", {"status": "completed"})
        assert merged["sport"] == "run"
        assert merged["status"] == "completed"
        assert repo.get_workout("ath-1", "w1") == merged

    def test_update_unknown_workout(self, repo: AthleteRepository) -> None:
        with pytest.raises(WorkoutNotFoundError):
            repo.update_workout("ath-1", "missing", {"status": "completed"})

    def test_list_workouts_half_open_range(self, repo: AthleteRepository) -> None:
        repo.save_workout("ath-1", {"id": "mon", "date": at(0, 0).isoformat(), "status": "planned"})
        repo.save_workout("ath-1", {"id": "sun", "date": at(6, 23).isoformat(), "status": "planned"})
        repo.save_workout("ath-1", {"id": "next", "date": at(7, 0).isoformat(), "status": "planned"})
        repo.save_workout("ath-1", {"id": "before", "date": at(-1, 23).isoformat(), "status": "planned"})
        found = repo.list_workouts("ath-1", at(0, 0), at(7, 0))
        assert sorted(w["id"] for w in found) == ["mon", "sun"]

    def test_list_workouts_compares_instants_across_offsets(self, repo: AthleteRepository) -> None:
        # 00:30 at +01:00 is still Sunday 23:30 UTC, before the week
        repo.save_workout("ath-1", {"id": "w", "date": "2026-03-02T00:30:00+01:00", "status": "planned"})
        assert repo.list_workouts("ath-1", at(0, 0), at(7, 0)) == []

    def test_naive_date_read_in_the_bounds_zone(self, repo: AthleteRepository) -> None:
        repo.save_workout("ath-1", {"id": "w", "date": "2026-03-08T23:30:00", "status": "planned"})
        this_week = repo.list_workouts(
            "ath-1", datetime(2026, 3, 2, tzinfo=MADRID), datetime(2026, 3, 9, tzinfo=MADRID)
        )
        next_week = repo.list_workouts(
            "ath-1", datetime(2026, 3, 9, tzinfo=MADRID), datetime(2026, 3, 16, tzinfo=MADRID)
        )
        assert [w["id"] for w in this_week] == ["w"]
        assert next_week == []

    def test_update_keeps_naive_date_indexed(self, repo: AthleteRepository) -> None:
        repo.save_workout("ath-1", {"id": "w", "date": "2026-03-08T23:30:00", "status": "planned"})
        repo.update_workout("ath-1", "w", {"status": "completed"})
        found = repo.list_workouts(
            "ath-1", datetime(2026, 3, 2, tzinfo=MADRID), datetime(2026, 3, 9, tzinfo=MADRID)
        )
        assert [w["status"] for w in found] == ["completed"]

    def test_list_all_workouts(self, repo: AthleteRepository) -> None:
        for wid in ("b", "a", "c"):
            repo.save_workout("ath-1", workout_doc(wid))
        assert [w["id"] for w in repo.list_all_workouts("ath-1")] == ["a", "b", "c"]
        assert len(repo.list_all_workouts("ath-1", limit=2)) == 2

    def test_returned_documents_are_copies(self, repo: AthleteRepository) -> None:
        repo.save_workout("ath-1", workout_doc("w1"))
        repo.get_workout("ath-1", "w1")["status"] = "completed"
        assert repo.get_workout("ath-1", "w1")["status"] == "planned"


class TestCheckins:
    def test_latest_by_completed_at(self, repo: AthleteRepository) -> None:
        repo.add_checkin("ath-1", "w1", {"rpe": 5, "completedAt": "2026-03-03T08:00:00+00:00"})
        repo.add_checkin("ath-1", "w1", {"rpe": 9, "completedAt": "2026-03-03T07:00:00+00:00"})
        latest = repo.latest_checkin("ath-1", "w1")
        assert latest is not None
        assert latest["rpe"] == 5
        assert latest["id"]

    def test_tie_goes_to_newest_insert(self, repo: AthleteRepository) -> None:
        stamp = "2026-03-03T08:00:00+00:00"
        repo.add_checkin("ath-1", "w1", {"rpe": 5, "completedAt": stamp})
        repo.add_checkin("ath-1", "w1", {"rpe": 6, "completedAt": stamp})
        assert repo.latest_checkin("ath-1", "w1")["rpe"] == 6

    def test_no_checkins(self, repo: AthleteRepository) -> None:
        assert repo.latest_checkin("ath-1", "w1") is None

    def test_ids_are_distinct(self, repo: AthleteRepository) -> None:
        first = repo.add_checkin("ath-1", "w1", {"completedAt": at(1).isoformat()})
        second = repo.add_checkin("ath-1", "w1", {"completedAt": at(1).isoformat()})
        assert first != second


class TestWeeklyStatus:
    def test_status_replaces_only_its_subtree(self, repo: AthleteRepository) -> None:
        repo.save_weekly_status("ath-1", {"status": "yellow"}, _history("2026-03-02", "yellow"))
        repo.save_weekly_status("ath-1", {"status": "red"}, _history("2026-03-02", "red"))
        profile = repo.get_profile("ath-1")
        assert profile == {"name": "Lucía", "weeklyAutoStatus": {"status": "red"}}

    def test_history_upsert_one_entry_per_week(self, repo: AthleteRepository) -> None:
        repo.save_weekly_status("ath-1", {"status": "yellow"}, _history("2026-03-02", "yellow"))
        repo.save_weekly_status("ath-1", {"status": "red"}, _history("2026-03-02", "red"))
        entries = repo.list_history("ath-1")
        assert len(entries) == 1
        assert entries[0]["status"] == "red"
        assert repo.get_history("ath-1", "2026-03-02")["status"] == "red"

    def test_history_newest_first_and_limited(self, repo: AthleteRepository) -> None:
        for key in ("2026-02-16", "2026-03-02", "2026-02-23"):
            repo.save_weekly_status("ath-1", {"status": "green"}, _history(key))
        assert [e["weekKey"] for e in repo.list_history("ath-1")] == [
            "2026-03-02", "2026-02-23", "2026-02-16",
        ]
        assert len(repo.list_history("ath-1", limit=2)) == 2

    def test_unknown_athlete_writes_nothing(self, repo: AthleteRepository) -> None:
        with pytest.raises(AthleteNotFoundError):
            repo.save_weekly_status("nobody", {"status": "red"}, _history("2026-03-02"))
        assert repo.list_history("nobody") == []


class TestSQLiteRepository:
    def test_data_survives_reopen(self, tmp_path) -> None:
        path = tmp_path / "store" / "athletes.db"
        SQLiteRepository(path).create_athlete("ath-1", {"name": "Lucía"})
        assert SQLiteRepository(path).get_profile("ath-1") == {"name": "Lucía"}

    def test_backend_failure_is_persistence_error(self, tmp_path) -> None:
        from athlete_store.exceptions import PersistenceError

        repo = SQLiteRepository(tmp_path / "athletes.db")
        repo.create_athlete("ath-1", {})
        with pytest.raises(PersistenceError):
            # history entries need a weekStart column value
            repo.save_weekly_status("ath-1", {"status": "red"}, {"weekKey": "k", "weekStart": None})
        # the status update rolled back with the failed history write
        assert "weeklyAutoStatus" not in repo.get_profile("ath-1")

    def test_naive_workout_date(self, tmp_path) -> None:
        repo = SQLiteRepository(tmp_path / "athletes.db")
        repo.save_workout("ath-1", {"id": "w", "date": "2026-03-03T07:00:00", "status": "planned"})
        found = repo.list_workouts(
            "ath-1", datetime(2026, 3, 2, tzinfo=UTC), datetime(2026, 3, 9, tzinfo=UTC)
        )
        assert [w["id"] for w in found] == ["w"]
