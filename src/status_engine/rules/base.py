"""Abstract base class for all weekly status rules."""

from __future__ import annotations

from abc import ABC, abstractmethod

from status_engine.models.enums import RuleGroup, Severity
from status_engine.models.verdict import RuleVerdict
from status_engine.models.weekly import WeekSnapshot


class StatusRule(ABC):
    """Base class for all weekly status rules.

    Each rule answers one question: "does this rule apply to the week, and
    if so what severity does it imply?". Rules never see each other's
    results; the StatusClassifier merges their verdicts.

    Subclasses must define:
        rule_id: unique identifier (e.g. "skip_count")
        version: semantic version string
        group: RuleGroup, used for stable trace ordering
        required_data: WeekSnapshot attribute names that must not be None
        evaluate(): the rule's decision logic
    """

    rule_id: str
    version: str
    group: RuleGroup
    required_data: list[str]

    def has_required_data(self, snapshot: WeekSnapshot) -> bool:
        """Check that all required WeekSnapshot attributes are not None."""
        for field_name in self.required_data:
            if getattr(snapshot, field_name, None) is None:
                return False
        return True

    @abstractmethod
    def evaluate(self, snapshot: WeekSnapshot) -> RuleVerdict | None:
        """Evaluate this rule against the week.

        Returns a RuleVerdict if the rule implies a severity, or None if it
        has nothing to say.
        """
        ...

    def verdict(self, severity: Severity, explanation: str) -> RuleVerdict:
        return RuleVerdict(
            rule_id=self.rule_id,
            rule_version=self.version,
            group=self.group,
            severity=severity,
            explanation=explanation,
        )


class SignalBandRule(StatusRule):
    """Two-band threshold on one weekly signal: ``>= red_at`` RED, ``>= yellow_at`` YELLOW.

    Only evaluated when the signal is present for the week.
    """

    signal_name: str
    signal_label: str
    red_at: float
    yellow_at: float

    @property
    def required_data(self) -> list[str]:  # type: ignore[override]
        return [self.signal_name]

    def evaluate(self, snapshot: WeekSnapshot) -> RuleVerdict | None:
        value: float = getattr(snapshot, self.signal_name)

        if value >= self.red_at:
            return self.verdict(
                Severity.RED,
                f"{self.signal_label} {value:.1f} at or above {self.red_at}.",
            )

        if value >= self.yellow_at:
            return self.verdict(
                Severity.YELLOW,
                f"{self.signal_label} {value:.1f} in [{self.yellow_at}, {self.red_at}).",
            )

        return None
