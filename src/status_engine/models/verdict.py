"""Rule verdict output — what a single status rule implies."""

from __future__ import annotations

from dataclasses import dataclass

from status_engine.models.enums import RuleGroup, Severity


@dataclass(frozen=True)
class RuleVerdict:
    """A single rule's implied severity for the week.

    Rules produce these; the StatusClassifier merges their severities into
    the final weekly status.
    """

    rule_id: str
    rule_version: str
    group: RuleGroup
    severity: Severity
    explanation: str = ""
