"""Classification trace — which rules decided the weekly color, and why the rest did not."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import auto, IntEnum

from status_engine.models.enums import Severity
from status_engine.models.verdict import RuleVerdict


class RuleStatus(IntEnum):
    FIRED = auto()
    SKIPPED = auto()
    NOT_APPLICABLE = auto()


@dataclass(frozen=True)
class RuleResult:
    """One rule's part in a classification.

    ``severity`` is set only for FIRED rules; ``missing`` lists the snapshot
    fields that made a rule NOT_APPLICABLE.
    """

    rule_id: str
    status: RuleStatus
    severity: Severity | None = None
    missing: tuple[str, ...] = ()
    explanation: str = ""

    @classmethod
    def fired(cls, verdict: RuleVerdict) -> RuleResult:
        return cls(
            rule_id=verdict.rule_id,
            status=RuleStatus.FIRED,
            severity=verdict.severity,
            explanation=verdict.explanation,
        )

    @classmethod
    def skipped(cls, rule_id: str) -> RuleResult:
        return cls(rule_id=rule_id, status=RuleStatus.SKIPPED, explanation="Rule implied no severity.")

    @classmethod
    def not_applicable(cls, rule_id: str, missing: tuple[str, ...]) -> RuleResult:
        return cls(
            rule_id=rule_id,
            status=RuleStatus.NOT_APPLICABLE,
            missing=missing,
            explanation=f"Missing required data: {', '.join(missing)}",
        )


@dataclass(frozen=True)
class ClassificationTrace:
    """Every rule's result for one StatusClassifier.classify() call, in rule order."""

    rule_results: tuple[RuleResult, ...] = field(default_factory=tuple)
    final_status: Severity = Severity.GREEN

    def fired(self) -> tuple[RuleResult, ...]:
        return tuple(r for r in self.rule_results if r.status == RuleStatus.FIRED)

    def deciding(self) -> tuple[RuleResult, ...]:
        """Fired rules whose severity equals the final status.

        Empty for a green week with no verdicts.
        """
        return tuple(r for r in self.fired() if r.severity == self.final_status)

    @property
    def merge_notes(self) -> str:
        fired = self.fired()
        if not fired:
            return "No rule fired; status stays green."
        merged = ", ".join(f"{r.rule_id}={r.severity.label}" for r in fired)
        return f"Merged {merged} -> {self.final_status.label}"
