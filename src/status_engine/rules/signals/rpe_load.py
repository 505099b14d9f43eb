"""SIGNALS rule: weekly average RPE."""

from __future__ import annotations

from status_engine.models.enums import AVG_RPE_RED, AVG_RPE_YELLOW, RuleGroup
from status_engine.rules.base import SignalBandRule


class AverageRPERule(SignalBandRule):
    rule_id = "avg_rpe"
    version = "1.0.0"
    group = RuleGroup.SIGNALS
    signal_name = "avg_rpe"
    signal_label = "Average RPE"
    red_at = AVG_RPE_RED
    yellow_at = AVG_RPE_YELLOW
