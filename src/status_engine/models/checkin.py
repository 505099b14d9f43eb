"""Post-workout check-in as entered by the athlete."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from status_engine.models.enums import (
    FATIGUE_MAX,
    FATIGUE_MIN,
    PAIN_INTENSITY_MAX,
    PAIN_INTENSITY_MIN,
    RPE_MAX,
    RPE_MIN,
    SLEEP_MAX,
    SLEEP_MIN,
    Feeling,
    IntensityHint,
    PainArea,
    WorkoutStatus,
)
from status_engine.models.outcome import CheckinSummary, PainSnapshot


def _check_range(name: str, value: float | None, low: float, high: float) -> None:
    if value is None:
        return
    if not low <= value <= high:
        raise ValueError(f"{name} must be within [{low}, {high}], got {value}")


@dataclass(frozen=True)
class PainReport:
    has_pain: bool = False
    area: PainArea | None = None
    intensity: float | None = None
    note: str | None = None

    def __post_init__(self) -> None:
        _check_range("pain intensity", self.intensity, PAIN_INTENSITY_MIN, PAIN_INTENSITY_MAX)


@dataclass(frozen=True)
class CheckIn:
    """A single check-in saved for a workout. A workout may have many."""

    status: WorkoutStatus
    rpe: float
    feeling: Feeling
    fatigue: float
    sleep: float
    pain: PainReport = field(default_factory=PainReport)
    note: str | None = None
    actual_duration_min: float | None = None
    intensity_hint: IntensityHint | None = None
    completed_at: datetime | None = None  # stamped on save when absent

    def __post_init__(self) -> None:
        _check_range("rpe", self.rpe, RPE_MIN, RPE_MAX)
        _check_range("fatigue", self.fatigue, FATIGUE_MIN, FATIGUE_MAX)
        _check_range("sleep", self.sleep, SLEEP_MIN, SLEEP_MAX)
        if self.actual_duration_min is not None and self.actual_duration_min < 0:
            raise ValueError("actual_duration_min cannot be negative")

    def to_summary(self) -> CheckinSummary:
        """Reduce this check-in to the cached summary stored on the workout."""
        return CheckinSummary(
            rpe=self.rpe,
            fatigue=self.fatigue,
            pain=PainSnapshot(
                has_pain=self.pain.has_pain,
                intensity=self.pain.intensity,
                area=self.pain.area,
            ),
        )
