"""Tests for ProgressRatioRule — PROGRESS share of workouts done."""

from __future__ import annotations

from conftest import make_snapshot

from status_engine.models.enums import RuleGroup, Severity
from status_engine.rules.progress.progress_ratio import ProgressRatioRule


class TestProgressRatioRule:
    def setup_method(self) -> None:
        self.rule = ProgressRatioRule()

    def test_is_progress_group(self) -> None:
        assert self.rule.group == RuleGroup.PROGRESS

    def test_not_applicable_to_empty_week(self) -> None:
        assert not self.rule.has_required_data(make_snapshot(total=0))

    def test_red_below_half(self) -> None:
        # 1 of 3 done -> 33%
        verdict = self.rule.evaluate(make_snapshot(total=3, done=1, pending=2))
        assert verdict is not None
        assert verdict.severity == Severity.RED

    def test_exactly_half_is_yellow(self) -> None:
        verdict = self.rule.evaluate(make_snapshot(total=4, done=2, pending=2))
        assert verdict is not None
        assert verdict.severity == Severity.YELLOW

    def test_yellow_below_eighty(self) -> None:
        # 3 of 4 done -> 75%
        verdict = self.rule.evaluate(make_snapshot(total=4, done=3, pending=1))
        assert verdict is not None
        assert verdict.severity == Severity.YELLOW

    def test_exactly_eighty_is_fine(self) -> None:
        assert self.rule.evaluate(make_snapshot(total=5, done=4, pending=1)) is None

    def test_all_done(self) -> None:
        assert self.rule.evaluate(make_snapshot(total=3, done=3)) is None

    def test_verdict_carries_rule_identity(self) -> None:
        verdict = self.rule.evaluate(make_snapshot(total=2, done=0, pending=2))
        assert verdict is not None
        assert verdict.rule_id == "progress_ratio"
        assert verdict.rule_version == self.rule.version
        assert "0%" in verdict.explanation
