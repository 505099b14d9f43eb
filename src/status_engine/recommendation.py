"""Recommendation synthesizer — turns the weekly status into a coaching action.

The action is chosen first-match-wins:

    1. RED status, injury/illness skips or high pain   -> REST
    2. YELLOW status, high stress or fatigue skips     -> REDUCE
    3. otherwise                                       -> CONTINUE

Trigger labels are collected independently of which condition gated the
action; they only explain the week to the athlete.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from status_engine.models.enums import (
    LOW_PROGRESS_TRIGGER_PCT,
    MANY_SKIPS_TRIGGER_AT,
    OTHER_SKIPS_TRIGGER_AT,
    PAIN_CRITICAL,
    STRESS_AVG_FATIGUE,
    STRESS_AVG_RPE,
    TIME_SKIPS_TRIGGER_AT,
    RecommendationAction,
    Severity,
)
from status_engine.models.weekly import WeeklyRecommendation, WeekSnapshot


class Trigger(Enum):
    """Explainability labels, declared in their fixed output order."""

    CRITICAL_REASON = "lesión/enfermedad"
    PAIN_CRITICAL = "dolor alto"
    STRESS_HIGH = "estrés alto (RPE/Fatiga)"
    LOW_PROGRESS = "bajo progreso semanal"
    MANY_SKIPS = "muchos entrenos saltados"
    TIME_CONSTRAINED = "faltas por tiempo"
    MANY_OTHER_REASONS = "varios motivos (otro)"


# (title, message) per action, shown verbatim in the athlete dashboard
RECOMMENDATION_COPY: dict[RecommendationAction, tuple[str, str]] = {
    RecommendationAction.REST: (
        "Descanso / descarga",
        "Hay señales de riesgo (lesión/enfermedad/dolor o semana muy irregular). "
        "Reduce carga 24–48h y prioriza recuperación. Si hay dolor alto, evita intensidad.",
    ),
    RecommendationAction.REDUCE: (
        "Bajar un punto la carga",
        "Vas justo o vienes cargado. Mantén entrenos fáciles, reduce intensidad o "
        "volumen un 10–20% y revisa sueño/estrés. Si aparece dolor, ajusta.",
    ),
    RecommendationAction.CONTINUE: (
        "Sigue el plan",
        "Vas bien. Mantén la carga y cuida descanso, nutrición e hidratación.",
    ),
}


@dataclass(frozen=True)
class RecommendationFlags:
    """Derived booleans feeding action selection and triggers.

    Missing signals count as 0 here.
    """

    has_critical_reason: bool
    pain_critical: bool
    stress_high: bool
    fatigue_skips: bool

    @classmethod
    def from_snapshot(cls, snapshot: WeekSnapshot) -> RecommendationFlags:
        avg_rpe = snapshot.avg_rpe or 0.0
        avg_fatigue = snapshot.avg_fatigue or 0.0
        max_pain = snapshot.max_pain or 0.0
        return cls(
            has_critical_reason=snapshot.reasons.has_critical,
            pain_critical=max_pain >= PAIN_CRITICAL,
            stress_high=avg_rpe >= STRESS_AVG_RPE or avg_fatigue >= STRESS_AVG_FATIGUE,
            fatigue_skips=snapshot.reasons.fatigue >= 1,
        )


class RecommendationSynthesizer:
    """Maps a weekly status and its snapshot to a recommendation and triggers."""

    def __init__(
        self, copy: dict[RecommendationAction, tuple[str, str]] | None = None
    ) -> None:
        self.copy = copy or RECOMMENDATION_COPY

    def synthesize(
        self, status: Severity, snapshot: WeekSnapshot
    ) -> tuple[WeeklyRecommendation, tuple[str, ...]]:
        """Build the recommendation and the ordered trigger labels for a week."""
        flags = RecommendationFlags.from_snapshot(snapshot)
        action = self.select_action(status, flags)
        title, message = self.copy[action]
        recommendation = WeeklyRecommendation(action=action, title=title, message=message)
        triggers = tuple(t.value for t in self.collect_triggers(snapshot, flags))
        return recommendation, triggers

    @staticmethod
    def select_action(status: Severity, flags: RecommendationFlags) -> RecommendationAction:
        if status == Severity.RED or flags.has_critical_reason or flags.pain_critical:
            return RecommendationAction.REST
        if status == Severity.YELLOW or flags.stress_high or flags.fatigue_skips:
            return RecommendationAction.REDUCE
        return RecommendationAction.CONTINUE

    @staticmethod
    def collect_triggers(
        snapshot: WeekSnapshot, flags: RecommendationFlags
    ) -> list[Trigger]:
        reasons = snapshot.reasons
        pct_done = snapshot.pct_done
        checks = (
            (Trigger.CRITICAL_REASON, flags.has_critical_reason),
            (Trigger.PAIN_CRITICAL, flags.pain_critical),
            (Trigger.STRESS_HIGH, flags.stress_high),
            (Trigger.LOW_PROGRESS, pct_done is not None and pct_done < LOW_PROGRESS_TRIGGER_PCT),
            (Trigger.MANY_SKIPS, snapshot.skipped >= MANY_SKIPS_TRIGGER_AT),
            (Trigger.TIME_CONSTRAINED, reasons.time >= TIME_SKIPS_TRIGGER_AT),
            (Trigger.MANY_OTHER_REASONS, reasons.other >= OTHER_SKIPS_TRIGGER_AT),
        )
        return [trigger for trigger, holds in checks if holds]
