"""Weekly bundle models: stats, signals, recommendation, status and history."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime

from status_engine.models.enums import RecommendationAction, Severity, SkipReason


@dataclass(frozen=True)
class ReasonTally:
    """Skip counts per reason. All five reasons are always present."""

    injury: int = 0
    sick: int = 0
    fatigue: int = 0
    time: int = 0
    other: int = 0

    def __getitem__(self, reason: SkipReason) -> int:
        return getattr(self, reason.value)

    @classmethod
    def from_counts(cls, counts: dict[SkipReason, int]) -> ReasonTally:
        return cls(**{reason.value: counts.get(reason, 0) for reason in SkipReason})

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @property
    def has_critical(self) -> bool:
        """Injury or illness among this week's skips."""
        return self.injury >= 1 or self.sick >= 1


@dataclass(frozen=True)
class WeeklyStats:
    """Workout counts for one week.

    ``done + pending + skipped <= total``; workouts in other lifecycle
    states are simply uncounted.
    """

    total: int = 0
    done: int = 0
    pending: int = 0
    skipped: int = 0
    reasons: ReasonTally = field(default_factory=ReasonTally)

    @property
    def pct_done(self) -> float | None:
        """Completed share in percent, None for an empty week."""
        if self.total == 0:
            return None
        return self.done / self.total * 100


@dataclass(frozen=True)
class WeeklySignals:
    """Subjective check-in signals for one week, one decimal each.

    None means "no data this week", which is distinct from 0.
    """

    avg_rpe: float | None = None
    avg_fatigue: float | None = None
    max_pain: float | None = None


@dataclass(frozen=True)
class WeekSnapshot:
    """Frozen input to every status rule and to the recommendation synthesizer."""

    stats: WeeklyStats
    signals: WeeklySignals

    @property
    def total(self) -> int:
        return self.stats.total

    @property
    def pct_done(self) -> float | None:
        return self.stats.pct_done

    @property
    def skipped(self) -> int:
        return self.stats.skipped

    @property
    def reasons(self) -> ReasonTally:
        return self.stats.reasons

    @property
    def avg_rpe(self) -> float | None:
        return self.signals.avg_rpe

    @property
    def avg_fatigue(self) -> float | None:
        return self.signals.avg_fatigue

    @property
    def max_pain(self) -> float | None:
        return self.signals.max_pain


@dataclass(frozen=True)
class WeeklyRecommendation:
    action: RecommendationAction
    title: str
    message: str


@dataclass(frozen=True)
class WeeklyAutoStatus:
    """Current weekly status of an athlete, overwritten on every recompute."""

    week_start: date
    status: Severity
    stats: WeeklyStats
    signals: WeeklySignals
    recommendation: WeeklyRecommendation
    recommendation_triggers: tuple[str, ...]
    updated_at: datetime

    @property
    def week_key(self) -> str:
        return self.week_start.isoformat()


@dataclass(frozen=True)
class WeeklyHistoryEntry:
    """Per-week history record: the weekly status plus its ``week_key``.

    At most one entry exists per athlete and week; recomputing a week
    overwrites it.
    """

    week_key: str
    week_start: date
    status: Severity
    stats: WeeklyStats
    signals: WeeklySignals
    recommendation: WeeklyRecommendation
    recommendation_triggers: tuple[str, ...]
    updated_at: datetime

    @classmethod
    def from_status(cls, status: WeeklyAutoStatus) -> WeeklyHistoryEntry:
        values = {f.name: getattr(status, f.name) for f in fields(WeeklyAutoStatus)}
        return cls(week_key=status.week_key, **values)

    def to_status(self) -> WeeklyAutoStatus:
        values = {f.name: getattr(self, f.name) for f in fields(WeeklyAutoStatus)}
        return WeeklyAutoStatus(**values)
