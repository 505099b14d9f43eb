"""StatusClassifier — merges every applicable rule verdict into one weekly status."""

from __future__ import annotations

import logging

from status_engine.models.decision_trace import ClassificationTrace, RuleResult
from status_engine.models.enums import Severity
from status_engine.models.verdict import RuleVerdict
from status_engine.models.weekly import WeekSnapshot
from status_engine.registry import RuleRegistry
from status_engine.severity import merge_all

logger = logging.getLogger(__name__)


class StatusClassifier:
    """Evaluates all status rules and merges their verdicts worsen-only.

    Rule order does not affect the status; it only fixes the order of the
    rule results in the trace.

    Usage:
        classifier = StatusClassifier()
        status, trace = classifier.classify(snapshot)
    """

    def __init__(self, registry: RuleRegistry | None = None) -> None:
        self.registry = registry or RuleRegistry()

        # Auto-discover rules if using default registry
        if registry is None:
            self.registry.discover_rules()

    def classify(self, snapshot: WeekSnapshot) -> tuple[Severity, ClassificationTrace]:
        """Classify one week.

        Args:
            snapshot: Frozen stats and signals of the week.

        Returns:
            A tuple of (final Severity, ClassificationTrace).
        """
        rule_results: list[RuleResult] = []
        verdicts: list[RuleVerdict] = []

        for rule in self.registry.get_all_rules():
            if not rule.has_required_data(snapshot):
                missing = tuple(
                    name for name in rule.required_data if getattr(snapshot, name, None) is None
                )
                rule_results.append(RuleResult.not_applicable(rule.rule_id, missing))
                continue

            verdict = rule.evaluate(snapshot)
            if verdict is None:
                rule_results.append(RuleResult.skipped(rule.rule_id))
                continue

            verdicts.append(verdict)
            rule_results.append(RuleResult.fired(verdict))

        status = merge_all(v.severity for v in verdicts)
        trace = ClassificationTrace(rule_results=tuple(rule_results), final_status=status)
        logger.debug("Weekly status %s (%s)", status.label, trace.merge_notes)
        return status, trace
