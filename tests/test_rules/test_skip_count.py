"""Tests for SkipCountRule — SKIPS regardless of reason."""

from __future__ import annotations

from conftest import make_snapshot

from status_engine.models.enums import Severity
from status_engine.rules.skips.skip_count import SkipCountRule


class TestSkipCountRule:
    def setup_method(self) -> None:
        self.rule = SkipCountRule()

    def test_always_applicable(self) -> None:
        assert self.rule.has_required_data(make_snapshot())

    def test_no_skips(self) -> None:
        assert self.rule.evaluate(make_snapshot(total=3, done=3)) is None

    def test_one_skip_is_yellow(self) -> None:
        verdict = self.rule.evaluate(make_snapshot(total=3, done=2, skipped=1))
        assert verdict is not None
        assert verdict.severity == Severity.YELLOW

    def test_two_skips_are_red(self) -> None:
        verdict = self.rule.evaluate(make_snapshot(total=4, done=2, skipped=2))
        assert verdict is not None
        assert verdict.severity == Severity.RED
        assert "2 workouts skipped" in verdict.explanation
