"""Tests for progress tally and signal aggregation."""

from __future__ import annotations

import random

from conftest import make_outcome

from status_engine.math.aggregation import aggregate_signals, round_half_up, tally_progress
from status_engine.models.enums import SkipReason, WorkoutStatus
from status_engine.models.outcome import CheckinSummary, PainSnapshot, WorkoutOutcome

C, M, P, S = (
    WorkoutStatus.COMPLETED,
    WorkoutStatus.MODIFIED,
    WorkoutStatus.PLANNED,
    WorkoutStatus.SKIPPED,
)


class TestRoundHalfUp:
    def test_half_goes_up(self) -> None:
        assert round_half_up(2.25) == 2.3
        assert round_half_up(7.05) == 7.1

    def test_already_rounded(self) -> None:
        assert round_half_up(7.0) == 7.0

    def test_repeating_decimal(self) -> None:
        assert round_half_up(5 / 3) == 1.7


class TestTallyProgress:
    def test_empty_week(self) -> None:
        stats = tally_progress([])
        assert (stats.total, stats.done, stats.pending, stats.skipped) == (0, 0, 0, 0)
        assert stats.pct_done is None
        assert stats.reasons.as_dict() == {
            "injury": 0, "sick": 0, "fatigue": 0, "time": 0, "other": 0,
        }

    def test_completed_and_modified_both_count_as_done(self) -> None:
        stats = tally_progress([make_outcome(C), make_outcome(M), make_outcome(P)])
        assert stats.done == 2
        assert stats.pending == 1
        assert stats.total == 3

    def test_skip_reasons_tallied(self) -> None:
        stats = tally_progress([
            make_outcome(S, reason=SkipReason.INJURY),
            make_outcome(S, reason=SkipReason.TIME),
            make_outcome(S, reason=SkipReason.TIME),
        ])
        assert stats.skipped == 3
        assert stats.reasons.injury == 1
        assert stats.reasons.time == 2

    def test_skip_without_reason_counts_as_other(self) -> None:
        stats = tally_progress([make_outcome(S)])
        assert stats.reasons.other == 1

    def test_reason_ignored_on_non_skipped(self) -> None:
        stats = tally_progress([make_outcome(C, reason=SkipReason.INJURY)])
        assert stats.reasons.injury == 0

    def test_counts_never_exceed_total(self) -> None:
        outcomes = [make_outcome(st) for st in (C, M, P, S, S)]
        stats = tally_progress(outcomes)
        assert stats.done + stats.pending + stats.skipped <= stats.total
        assert sum(stats.reasons.as_dict().values()) == stats.skipped

    def test_order_insensitive(self) -> None:
        outcomes = [make_outcome(st, reason=SkipReason.FATIGUE) for st in (C, P, S, S, M)]
        shuffled = list(outcomes)
        random.Random(7).shuffle(shuffled)
        assert tally_progress(outcomes) == tally_progress(shuffled)


class TestAggregateSignals:
    def test_no_summaries_means_no_signals(self) -> None:
        signals = aggregate_signals([make_outcome(C), make_outcome(S)])
        assert (signals.avg_rpe, signals.avg_fatigue, signals.max_pain) == (None, None, None)

    def test_average_rpe(self) -> None:
        signals = aggregate_signals([
            make_outcome(C, rpe=6),
            make_outcome(C, rpe=7),
            make_outcome(C, rpe=8),
        ])
        assert signals.avg_rpe == 7.0

    def test_average_is_rounded_to_one_decimal(self) -> None:
        signals = aggregate_signals([
            make_outcome(C, fatigue=1),
            make_outcome(C, fatigue=2),
            make_outcome(C, fatigue=2),
        ])
        assert signals.avg_fatigue == 1.7

    def test_missing_values_are_excluded_not_zero(self) -> None:
        signals = aggregate_signals([
            make_outcome(C, rpe=8, fatigue=None),
            make_outcome(C, rpe=None, fatigue=2),
        ])
        assert signals.avg_rpe == 8.0
        assert signals.avg_fatigue == 2.0

    def test_zero_fatigue_is_a_value(self) -> None:
        assert aggregate_signals([make_outcome(C, fatigue=0)]).avg_fatigue == 0.0

    def test_max_pain_only_from_pain_reports(self) -> None:
        no_pain = WorkoutOutcome(
            date=make_outcome().date,
            status=C,
            last_checkin_summary=CheckinSummary(
                rpe=5, pain=PainSnapshot(has_pain=False, intensity=9)
            ),
        )
        signals = aggregate_signals([no_pain, make_outcome(C, pain=4)])
        assert signals.max_pain == 4.0

    def test_pain_without_intensity_is_no_signal(self) -> None:
        outcome = WorkoutOutcome(
            date=make_outcome().date,
            status=C,
            last_checkin_summary=CheckinSummary(pain=PainSnapshot(has_pain=True)),
        )
        assert aggregate_signals([outcome]).max_pain is None

    def test_skipped_workout_summary_still_counts(self) -> None:
        signals = aggregate_signals([make_outcome(S, reason=SkipReason.FATIGUE, fatigue=5)])
        assert signals.avg_fatigue == 5.0
