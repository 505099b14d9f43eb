"""SKIPS rule: raw number of skipped workouts, regardless of reason."""

from __future__ import annotations

from status_engine.models.enums import (
    SKIPS_RED_AT,
    SKIPS_YELLOW_AT,
    RuleGroup,
    Severity,
)
from status_engine.models.verdict import RuleVerdict
from status_engine.models.weekly import WeekSnapshot
from status_engine.rules.base import StatusRule


class SkipCountRule(StatusRule):
    rule_id = "skip_count"
    version = "1.0.0"
    group = RuleGroup.SKIPS
    required_data: list[str] = []

    def evaluate(self, snapshot: WeekSnapshot) -> RuleVerdict | None:
        skipped = snapshot.skipped

        if skipped >= SKIPS_RED_AT:
            return self.verdict(Severity.RED, f"{skipped} workouts skipped this week.")

        if skipped >= SKIPS_YELLOW_AT:
            return self.verdict(Severity.YELLOW, "1 workout skipped this week.")

        return None
