"""Tests for the nightly reconciliation job and the backfill CLI."""

from __future__ import annotations

from unittest.mock import MagicMock

from conftest import FIXED_NOW, workout_doc

from athlete_store.exceptions import PersistenceError
from athlete_store.sqlite import SQLiteRepository
from athlete_store.weekly_status import WeeklyStatusService
from scheduler import backfill as backfill_cli
from scheduler.nightly import nightly_job


class TestNightlyJob:
    def test_recomputes_every_athlete(self, repository, status_service) -> None:
        repository.create_athlete("ath-2", {})
        repository.save_workout("ath-2", workout_doc("w1", day=1, status="skipped",
                                                     skippedReason="injury"))

        assert nightly_job(status_service=status_service) == 2

        assert repository.get_profile("ath-1")["weeklyAutoStatus"]["status"] == "green"
        assert repository.get_profile("ath-2")["weeklyAutoStatus"]["status"] == "red"

    def test_failed_athlete_does_not_stop_the_run(self, repository) -> None:
        repository.create_athlete("ath-2", {})
        service = WeeklyStatusService(repository, clock=lambda: FIXED_NOW)
        real_recompute = service.recompute

        def flaky(athlete_id, reference=None):
            if athlete_id == "ath-1":
                raise PersistenceError("locked")
            return real_recompute(athlete_id, reference)

        service.recompute = MagicMock(side_effect=flaky)

        assert nightly_job(status_service=service) == 1
        assert service.recompute.call_count == 2

    def test_unexpected_error_does_not_stop_the_run(self, repository) -> None:
        repository.create_athlete("ath-0", {})
        service = WeeklyStatusService(repository, clock=lambda: FIXED_NOW)
        real_recompute = service.recompute

        def broken(athlete_id, reference=None):
            if athlete_id == "ath-0":
                raise KeyError("weekKey")
            return real_recompute(athlete_id, reference)

        service.recompute = MagicMock(side_effect=broken)

        assert nightly_job(status_service=service) == 1
        assert repository.get_profile("ath-1")["weeklyAutoStatus"] is not None

    def test_uses_given_repository(self, repository) -> None:
        assert nightly_job(repository=repository) == 1
        assert repository.get_profile("ath-1")["weeklyAutoStatus"] is not None


class TestBackfillCli:
    def test_runs_against_database(self, tmp_path, capsys) -> None:
        db = tmp_path / "athletes.db"
        repository = SQLiteRepository(db)
        repository.create_athlete("ath-1", {})
        repository.save_workout("ath-1", workout_doc("w1", day=1, status="completed"))
        repository.add_checkin(
            "ath-1", "w1", {"rpe": 6, "fatigue": 2, "completedAt": "2026-03-03T19:00:00+00:00"}
        )

        exit_code = backfill_cli.main(["--db", str(db), "--recompute"])

        assert exit_code == 0
        assert "updated=1" in capsys.readouterr().out
        assert repository.get_workout("ath-1", "w1")["lastCheckinSummary"]["rpe"] == 6.0
        assert repository.get_history("ath-1", "2026-03-02") is not None

    def test_parser_defaults(self) -> None:
        args = backfill_cli.build_parser().parse_args([])
        assert args.concurrency >= 1
        assert args.recompute is False
