"""SKIP_REASONS rule: weights skips by why they happened.

Evaluated as a cascade: once a branch matches, lower branches of this rule
are not checked. The result is still merged with every other rule.

    injury or illness        -> RED
    2+ fatigue skips         -> RED
    1 fatigue skip           -> YELLOW
    2+ lack-of-time skips    -> YELLOW
"""

from __future__ import annotations

from status_engine.models.enums import (
    FATIGUE_SKIPS_RED_AT,
    FATIGUE_SKIPS_YELLOW_AT,
    TIME_SKIPS_YELLOW_AT,
    RuleGroup,
    Severity,
)
from status_engine.models.verdict import RuleVerdict
from status_engine.models.weekly import WeekSnapshot
from status_engine.rules.base import StatusRule


class SkipReasonsRule(StatusRule):
    """Escalates on injury/illness and repeated fatigue or time skips."""

    rule_id = "skip_reasons"
    version = "1.0.0"
    group = RuleGroup.SKIP_REASONS
    required_data: list[str] = []

    def evaluate(self, snapshot: WeekSnapshot) -> RuleVerdict | None:
        reasons = snapshot.reasons

        if reasons.has_critical:
            return self.verdict(
                Severity.RED,
                f"Skipped for injury ({reasons.injury}) or illness ({reasons.sick}).",
            )

        if reasons.fatigue >= FATIGUE_SKIPS_RED_AT:
            return self.verdict(
                Severity.RED, f"{reasons.fatigue} workouts skipped for fatigue."
            )

        if reasons.fatigue >= FATIGUE_SKIPS_YELLOW_AT:
            return self.verdict(Severity.YELLOW, "1 workout skipped for fatigue.")

        if reasons.time >= TIME_SKIPS_YELLOW_AT:
            return self.verdict(
                Severity.YELLOW, f"{reasons.time} workouts skipped for lack of time."
            )

        return None
