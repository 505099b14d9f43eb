"""PROGRESS rule: share of the week's workouts already done.

Only applies to weeks with at least one scheduled workout.
"""

from __future__ import annotations

from status_engine.models.enums import (
    PROGRESS_RED_BELOW_PCT,
    PROGRESS_YELLOW_BELOW_PCT,
    RuleGroup,
    Severity,
)
from status_engine.models.verdict import RuleVerdict
from status_engine.models.weekly import WeekSnapshot
from status_engine.rules.base import StatusRule


class ProgressRatioRule(StatusRule):
    """Flags weeks where too few workouts are completed or modified."""

    rule_id = "progress_ratio"
    version = "1.0.0"
    group = RuleGroup.PROGRESS
    # pct_done is None when the week has no workouts
    required_data = ["pct_done"]

    def evaluate(self, snapshot: WeekSnapshot) -> RuleVerdict | None:
        # required_data check guarantees this is not None
        pct_done: float = snapshot.pct_done  # type: ignore[assignment]

        if pct_done < PROGRESS_RED_BELOW_PCT:
            return self.verdict(
                Severity.RED,
                f"Only {pct_done:.0f}% of workouts done "
                f"(below {PROGRESS_RED_BELOW_PCT:.0f}%).",
            )

        if pct_done < PROGRESS_YELLOW_BELOW_PCT:
            return self.verdict(
                Severity.YELLOW,
                f"{pct_done:.0f}% of workouts done "
                f"(below {PROGRESS_YELLOW_BELOW_PCT:.0f}%).",
            )

        return None
