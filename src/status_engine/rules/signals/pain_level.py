"""SIGNALS rule: highest pain intensity reported this week.

Pain is the one signal that escalates on a single bad check-in rather than
on the weekly average.
"""

from __future__ import annotations

from status_engine.models.enums import MAX_PAIN_RED, MAX_PAIN_YELLOW, RuleGroup
from status_engine.rules.base import SignalBandRule


class MaxPainRule(SignalBandRule):
    rule_id = "max_pain"
    version = "1.0.0"
    group = RuleGroup.SIGNALS
    signal_name = "max_pain"
    signal_label = "Max pain"
    red_at = MAX_PAIN_RED
    yellow_at = MAX_PAIN_YELLOW
