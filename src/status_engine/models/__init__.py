"""Data models for the weekly status engine."""

from status_engine.models.checkin import CheckIn, PainReport
from status_engine.models.decision_trace import ClassificationTrace, RuleResult, RuleStatus
from status_engine.models.enums import (
    Feeling,
    IntensityHint,
    PainArea,
    RecommendationAction,
    RuleGroup,
    Severity,
    SkipReason,
    Sport,
    WorkoutStatus,
)
from status_engine.models.outcome import CheckinSummary, PainSnapshot, WorkoutOutcome
from status_engine.models.verdict import RuleVerdict
from status_engine.models.weekly import (
    ReasonTally,
    WeeklyAutoStatus,
    WeeklyHistoryEntry,
    WeeklyRecommendation,
    WeeklySignals,
    WeeklyStats,
    WeekSnapshot,
)

__all__ = [
    "CheckIn",
    "CheckinSummary",
    "ClassificationTrace",
    "Feeling",
    "IntensityHint",
    "PainArea",
    "PainReport",
    "PainSnapshot",
    "ReasonTally",
    "RecommendationAction",
    "RuleGroup",
    "RuleResult",
    "RuleStatus",
    "RuleVerdict",
    "Severity",
    "SkipReason",
    "Sport",
    "WeekSnapshot",
    "WeeklyAutoStatus",
    "WeeklyHistoryEntry",
    "WeeklyRecommendation",
    "WeeklySignals",
    "WeeklyStats",
    "WorkoutOutcome",
    "WorkoutStatus",
]
