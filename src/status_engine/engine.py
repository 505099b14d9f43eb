"""StatusEngine — the orchestrator that turns a week of outcomes into a weekly bundle."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Iterable, Mapping

from status_engine.classifier import StatusClassifier
from status_engine.exceptions import MalformedOutcomeError
from status_engine.math.aggregation import aggregate_signals, tally_progress
from status_engine.models.decision_trace import ClassificationTrace
from status_engine.models.outcome import WorkoutOutcome
from status_engine.models.weekly import WeeklyAutoStatus, WeekSnapshot
from status_engine.recommendation import RecommendationSynthesizer
from status_engine.serialization.documents import outcome_from_document
from status_engine.week import in_week

logger = logging.getLogger(__name__)


class StatusEngine:
    """Computes the weekly status bundle for one athlete and one week.

    The computation is a pure fold over the week's outcomes: tally and
    signals (independent) feed the classifier, whose status feeds the
    recommendation synthesizer. Nothing is cached between calls.

    Usage:
        engine = StatusEngine()
        status, trace = engine.evaluate_week(outcomes, week_start)
    """

    def __init__(
        self,
        classifier: StatusClassifier | None = None,
        synthesizer: RecommendationSynthesizer | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        self.classifier = classifier or StatusClassifier()
        self.synthesizer = synthesizer or RecommendationSynthesizer()
        self.tz = tz

    def evaluate_week(
        self,
        outcomes: Iterable[WorkoutOutcome],
        week_start: date,
        updated_at: datetime | None = None,
    ) -> tuple[WeeklyAutoStatus, ClassificationTrace]:
        """Evaluate one week of outcomes.

        Args:
            outcomes: Outcomes selected for the week. Any dated outside the
                      week starting on *week_start* are excluded.
            week_start: Monday of the target week.
            updated_at: Timestamp stamped on the bundle; defaults to now (UTC).

        Returns:
            A tuple of (WeeklyAutoStatus, ClassificationTrace).
        """
        week_outcomes = []
        for outcome in outcomes:
            if not in_week(outcome.date, week_start, self.tz):
                logger.warning(
                    "Excluding workout %s dated %s from week %s",
                    outcome.workout_id,
                    outcome.date.isoformat(),
                    week_start.isoformat(),
                )
                continue
            week_outcomes.append(outcome)

        snapshot = WeekSnapshot(
            stats=tally_progress(week_outcomes),
            signals=aggregate_signals(week_outcomes),
        )
        status, trace = self.classifier.classify(snapshot)
        recommendation, triggers = self.synthesizer.synthesize(status, snapshot)

        weekly = WeeklyAutoStatus(
            week_start=week_start,
            status=status,
            stats=snapshot.stats,
            signals=snapshot.signals,
            recommendation=recommendation,
            recommendation_triggers=triggers,
            updated_at=updated_at or datetime.now(timezone.utc),
        )
        return weekly, trace

    def evaluate_documents(
        self,
        documents: Iterable[Mapping[str, Any]],
        week_start: date,
        updated_at: datetime | None = None,
    ) -> tuple[WeeklyAutoStatus, ClassificationTrace]:
        """Like evaluate_week(), from stored workout documents.

        Malformed documents (no usable date or status) are logged and left
        out instead of aborting the week.
        """
        outcomes: list[WorkoutOutcome] = []
        for doc in documents:
            try:
                outcomes.append(outcome_from_document(doc, self.tz))
            except MalformedOutcomeError as exc:
                logger.warning("Skipping malformed workout %s: %s", exc.workout_id, exc)
        return self.evaluate_week(outcomes, week_start, updated_at)
