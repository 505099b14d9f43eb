"""Weekly aggregation: progress tally and subjective signal folds.

Both folds are pure and order-insensitive over the week's outcomes.
"""

from __future__ import annotations

from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Sequence

import numpy as np

from status_engine.models.enums import SIGNAL_DECIMALS, SkipReason, WorkoutStatus
from status_engine.models.outcome import CheckinSummary, WorkoutOutcome
from status_engine.models.weekly import ReasonTally, WeeklySignals, WeeklyStats


def round_half_up(value: float, places: int = SIGNAL_DECIMALS) -> float:
    """Round *value* to *places* decimals, halves away from zero.

    Goes through the shortest decimal repr of the float, so 7.05 rounds to
    7.1 rather than following the binary representation down to 7.0.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def tally_progress(outcomes: Iterable[WorkoutOutcome]) -> WeeklyStats:
    """Count the week's workouts by lifecycle state and skip reason.

    Args:
        outcomes: All well-formed outcomes of a single week.

    Returns:
        WeeklyStats with every skip reason present (zero-filled).
    """
    statuses: Counter[WorkoutStatus] = Counter()
    reasons: Counter[SkipReason] = Counter()
    total = 0

    for outcome in outcomes:
        total += 1
        statuses[outcome.status] += 1
        reason = outcome.effective_skip_reason
        if reason is not None:
            reasons[reason] += 1

    return WeeklyStats(
        total=total,
        done=statuses[WorkoutStatus.COMPLETED] + statuses[WorkoutStatus.MODIFIED],
        pending=statuses[WorkoutStatus.PLANNED],
        skipped=statuses[WorkoutStatus.SKIPPED],
        reasons=ReasonTally.from_counts(reasons),
    )


def _rounded_mean(values: Sequence[float]) -> float | None:
    if not values:
        return None
    return round_half_up(float(np.mean(np.asarray(values, dtype=float))))


def _rounded_peak(values: Sequence[float]) -> float | None:
    if not values:
        return None
    peak = float(np.max(np.asarray(values, dtype=float)))
    # A week whose only pain reports carry no intensity has no pain signal
    return round_half_up(peak) if peak > 0 else None


def aggregate_signals(outcomes: Iterable[WorkoutOutcome]) -> WeeklySignals:
    """Reduce the cached check-in summaries of a week to scalar signals.

    RPE and fatigue are averaged over the summaries that carry them; absent
    values are excluded, not treated as zero. Max pain only considers
    summaries reporting pain. Every signal is None when there is no data.
    """
    summaries: list[CheckinSummary] = [
        o.last_checkin_summary for o in outcomes if o.last_checkin_summary is not None
    ]

    rpes = [s.rpe for s in summaries if s.rpe is not None]
    fatigues = [s.fatigue for s in summaries if s.fatigue is not None]
    pains = [
        s.pain.reported_intensity
        for s in summaries
        if s.pain.reported_intensity is not None
    ]

    return WeeklySignals(
        avg_rpe=_rounded_mean(rpes),
        avg_fatigue=_rounded_mean(fatigues),
        max_pain=_rounded_peak(pains),
    )
