"""SIGNALS rule: weekly average post-workout fatigue (0-5 scale)."""

from __future__ import annotations

from status_engine.models.enums import AVG_FATIGUE_RED, AVG_FATIGUE_YELLOW, RuleGroup
from status_engine.rules.base import SignalBandRule


class AverageFatigueRule(SignalBandRule):
    rule_id = "avg_fatigue"
    version = "1.0.0"
    group = RuleGroup.SIGNALS
    signal_name = "avg_fatigue"
    signal_label = "Average fatigue"
    red_at = AVG_FATIGUE_RED
    yellow_at = AVG_FATIGUE_YELLOW
