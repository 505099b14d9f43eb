"""Workout outcome — one scheduled workout as seen by the weekly status engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from status_engine.models.enums import (
    DONE_STATUSES,
    PainArea,
    SkipReason,
    Sport,
    WorkoutStatus,
)


@dataclass(frozen=True)
class PainSnapshot:
    """Pain part of a cached check-in summary."""

    has_pain: bool = False
    intensity: float | None = None  # 1-10
    area: PainArea | None = None

    @property
    def reported_intensity(self) -> float | None:
        """Intensity counted towards weekly max pain, None when no pain reported.

        A pain report without an intensity counts as 0.
        """
        if not self.has_pain:
            return None
        return self.intensity if self.intensity is not None else 0.0


@dataclass(frozen=True)
class CheckinSummary:
    """Denormalized snapshot of the latest check-in for one workout.

    Written once per check-in and overwritten by the next one. This is the
    only per-workout signal the engine reads.
    """

    rpe: float | None = None  # 1-10
    fatigue: float | None = None  # 0-5
    pain: PainSnapshot = field(default_factory=PainSnapshot)


@dataclass(frozen=True)
class WorkoutOutcome:
    """Immutable view of a scheduled workout and its outcome so far."""

    date: datetime
    status: WorkoutStatus
    sport: Sport | None = None
    skipped_reason: SkipReason | None = None
    last_checkin_summary: CheckinSummary | None = None
    workout_id: str | None = None

    @property
    def is_done(self) -> bool:
        return self.status in DONE_STATUSES

    @property
    def is_skipped(self) -> bool:
        return self.status == WorkoutStatus.SKIPPED

    @property
    def effective_skip_reason(self) -> SkipReason | None:
        """Skip reason used for tallying; a skip without a reason counts as OTHER."""
        if not self.is_skipped:
            return None
        return self.skipped_reason or SkipReason.OTHER
