"""Shared test fixtures: a fixed week, outcome builders and seeded athlete stores."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable

import pytest

from athlete_store.memory import InMemoryRepository
from athlete_store.weekly_status import WeeklyStatusService
from status_engine.engine import StatusEngine
from status_engine.models.enums import SkipReason, WorkoutStatus
from status_engine.models.outcome import CheckinSummary, PainSnapshot, WorkoutOutcome
from status_engine.models.weekly import ReasonTally, WeeklySignals, WeeklyStats, WeekSnapshot

UTC = timezone.utc

# Monday 2 March 2026
MONDAY = date(2026, 3, 2)
FIXED_NOW = datetime(2026, 3, 5, 12, 0, tzinfo=UTC)


def at(day_offset: int, hour: int = 7) -> datetime:
    """UTC instant *day_offset* days after MONDAY, e.g. at(6) is Sunday 07:00."""
    return datetime.combine(MONDAY + timedelta(days=day_offset), time(hour), tzinfo=UTC)


def make_outcome(
    status: WorkoutStatus = WorkoutStatus.COMPLETED,
    day: int = 0,
    reason: SkipReason | None = None,
    rpe: float | None = None,
    fatigue: float | None = None,
    pain: float | None = None,
    workout_id: str | None = None,
) -> WorkoutOutcome:
    """Outcome inside the MONDAY week; a summary is attached when any signal is given."""
    summary = None
    if rpe is not None or fatigue is not None or pain is not None:
        summary = CheckinSummary(
            rpe=rpe,
            fatigue=fatigue,
            pain=PainSnapshot(has_pain=pain is not None, intensity=pain),
        )
    return WorkoutOutcome(
        date=at(day),
        status=status,
        skipped_reason=reason,
        last_checkin_summary=summary,
        workout_id=workout_id,
    )


def make_snapshot(
    total: int = 0,
    done: int = 0,
    pending: int = 0,
    skipped: int = 0,
    reasons: dict[str, int] | None = None,
    avg_rpe: float | None = None,
    avg_fatigue: float | None = None,
    max_pain: float | None = None,
) -> WeekSnapshot:
    return WeekSnapshot(
        stats=WeeklyStats(
            total=total,
            done=done,
            pending=pending,
            skipped=skipped,
            reasons=ReasonTally(**(reasons or {})),
        ),
        signals=WeeklySignals(avg_rpe=avg_rpe, avg_fatigue=avg_fatigue, max_pain=max_pain),
    )


def workout_doc(
    workout_id: str,
    day: int = 0,
    status: str = "planned",
    **extra: Any,
) -> dict[str, Any]:
    """Stored workout document dated inside the MONDAY week."""
    return {"id": workout_id, "date": at(day).isoformat(), "status": status, **extra}


@pytest.fixture
def monday() -> date:
    return MONDAY


@pytest.fixture
def outcome_factory() -> Callable[..., WorkoutOutcome]:
    return make_outcome


@pytest.fixture
def snapshot_factory() -> Callable[..., WeekSnapshot]:
    return make_snapshot


@pytest.fixture
def engine() -> StatusEngine:
    return StatusEngine(tz=UTC)


@pytest.fixture
def repository() -> InMemoryRepository:
    """In-memory store with one athlete, 'ath-1', and no workouts."""
    repo = InMemoryRepository()
    repo.create_athlete("ath-1", {"name": "Lucía", "sport": "run"})
    return repo


@pytest.fixture
def status_service(repository: InMemoryRepository) -> WeeklyStatusService:
    """Service over the fixture store with a frozen clock inside the MONDAY week."""
    return WeeklyStatusService(repository, clock=lambda: FIXED_NOW, tz=UTC)
