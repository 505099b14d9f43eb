"""Tests for the weekly bundle models."""

from __future__ import annotations

from datetime import date, datetime, timezone

from status_engine.models.enums import RecommendationAction, Severity, SkipReason
from status_engine.models.weekly import (
    ReasonTally,
    WeeklyAutoStatus,
    WeeklyHistoryEntry,
    WeeklyRecommendation,
    WeeklySignals,
    WeeklyStats,
)


class TestReasonTally:
    def test_from_counts_zero_fills(self) -> None:
        tally = ReasonTally.from_counts({SkipReason.TIME: 2})
        assert tally.as_dict() == {"injury": 0, "sick": 0, "fatigue": 0, "time": 2, "other": 0}

    def test_lookup_by_reason(self) -> None:
        assert ReasonTally(fatigue=3)[SkipReason.FATIGUE] == 3

    def test_critical_reasons(self) -> None:
        assert ReasonTally(injury=1).has_critical
        assert ReasonTally(sick=1).has_critical
        assert not ReasonTally(fatigue=5, time=5, other=5).has_critical


class TestWeeklyStats:
    def test_pct_done(self) -> None:
        assert WeeklyStats(total=4, done=3, pending=1).pct_done == 75.0

    def test_pct_done_empty_week(self) -> None:
        assert WeeklyStats().pct_done is None


class TestWeeklyHistoryEntry:
    def setup_method(self) -> None:
        self.status = WeeklyAutoStatus(
            week_start=date(2026, 3, 2),
            status=Severity.YELLOW,
            stats=WeeklyStats(total=2, done=1, skipped=1, reasons=ReasonTally(time=1)),
            signals=WeeklySignals(avg_rpe=6.0),
            recommendation=WeeklyRecommendation(RecommendationAction.REDUCE, "t", "m"),
            recommendation_triggers=("bajo progreso semanal",),
            updated_at=datetime(2026, 3, 4, 20, 0, tzinfo=timezone.utc),
        )

    def test_week_key(self) -> None:
        assert self.status.week_key == "2026-03-02"

    def test_entry_mirrors_status(self) -> None:
        entry = WeeklyHistoryEntry.from_status(self.status)
        assert entry.week_key == "2026-03-02"
        assert entry.to_status() == self.status
