"""Document mapping between engine models and stored JSON documents.

Stored documents use the camelCase field names read by the dashboard
(``weeklyAutoStatus``, ``recommendationTriggers``, ``lastCheckinSummary``
...). Instants are ISO 8601 strings in UTC; dates are ``YYYY-MM-DD``.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Mapping

from status_engine.exceptions import MalformedOutcomeError
from status_engine.models.checkin import CheckIn, PainReport
from status_engine.models.enums import (
    Feeling,
    IntensityHint,
    PainArea,
    RecommendationAction,
    Severity,
    SkipReason,
    Sport,
    WorkoutStatus,
)
from status_engine.models.outcome import CheckinSummary, PainSnapshot, WorkoutOutcome
from status_engine.models.weekly import (
    ReasonTally,
    WeeklyAutoStatus,
    WeeklyHistoryEntry,
    WeeklyRecommendation,
    WeeklySignals,
    WeeklyStats,
)
from status_engine.week import to_local


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


def format_instant(instant: datetime, tz: tzinfo | None = None) -> str:
    """UTC ISO string with fixed microsecond precision, so strings sort like instants."""
    utc = to_local(instant, tz).astimezone(timezone.utc)
    return utc.isoformat(timespec="microseconds")


def parse_instant(value: Any, tz: tzinfo | None = None) -> datetime:
    """Parse a stored instant (ISO string or datetime) into an aware datetime.

    Raises:
        ValueError: the value is not an instant.
    """
    if isinstance(value, datetime):
        instant = value
    elif isinstance(value, str):
        instant = datetime.fromisoformat(value)
    else:
        raise ValueError(f"Not an instant: {value!r}")
    return to_local(instant, tz)


def _number(value: Any) -> float | None:
    """Finite real number or None. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _enum_or_none(enum_cls: Any, value: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _drop_none(doc: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in doc.items() if v is not None}


# ---------------------------------------------------------------------------
# Check-in summaries and workouts
# ---------------------------------------------------------------------------


def summary_to_document(summary: CheckinSummary) -> dict[str, Any]:
    pain = _drop_none({
        "hasPain": summary.pain.has_pain,
        "intensity": summary.pain.intensity,
        "area": summary.pain.area.value if summary.pain.area else None,
    })
    return _drop_none({"rpe": summary.rpe, "fatigue": summary.fatigue, "pain": pain})


def summary_from_document(doc: Any) -> CheckinSummary | None:
    """Read a cached summary leniently: unusable values are treated as absent."""
    if not isinstance(doc, Mapping):
        return None
    pain_doc = doc.get("pain")
    if isinstance(pain_doc, Mapping):
        pain = PainSnapshot(
            has_pain=bool(pain_doc.get("hasPain", False)),
            intensity=_number(pain_doc.get("intensity")),
            area=_enum_or_none(PainArea, pain_doc.get("area")),
        )
    else:
        pain = PainSnapshot()
    return CheckinSummary(
        rpe=_number(doc.get("rpe")),
        fatigue=_number(doc.get("fatigue")),
        pain=pain,
    )


def outcome_from_document(
    doc: Mapping[str, Any], tz: tzinfo | None = None
) -> WorkoutOutcome:
    """Build a WorkoutOutcome from a stored workout document.

    Raises:
        MalformedOutcomeError: ``date`` or ``status`` is missing or unparseable.
    """
    workout_id = doc.get("id")
    raw_date = doc.get("date")
    raw_status = doc.get("status")

    if raw_date is None:
        raise MalformedOutcomeError("Workout has no date", workout_id=workout_id)
    if raw_status is None:
        raise MalformedOutcomeError("Workout has no status", workout_id=workout_id)
    try:
        instant = parse_instant(raw_date, tz)
    except ValueError as exc:
        raise MalformedOutcomeError(
            f"Invalid workout date {raw_date!r}", workout_id=workout_id
        ) from exc
    try:
        status = WorkoutStatus(raw_status)
    except ValueError as exc:
        raise MalformedOutcomeError(
            f"Invalid workout status {raw_status!r}", workout_id=workout_id
        ) from exc

    skipped_reason = None
    if status == WorkoutStatus.SKIPPED:
        # Unknown or missing reasons are tallied as OTHER
        skipped_reason = _enum_or_none(SkipReason, doc.get("skippedReason")) or SkipReason.OTHER

    return WorkoutOutcome(
        date=instant,
        status=status,
        sport=_enum_or_none(Sport, doc.get("sport")),
        skipped_reason=skipped_reason,
        last_checkin_summary=summary_from_document(doc.get("lastCheckinSummary")),
        workout_id=workout_id,
    )


# ---------------------------------------------------------------------------
# Check-ins
# ---------------------------------------------------------------------------


def checkin_to_document(checkin: CheckIn) -> dict[str, Any]:
    pain = _drop_none({
        "hasPain": checkin.pain.has_pain,
        "area": checkin.pain.area.value if checkin.pain.area else None,
        "intensity": checkin.pain.intensity,
        "note": checkin.pain.note,
    })
    actual = _drop_none({
        "durationMin": checkin.actual_duration_min,
        "intensityHint": checkin.intensity_hint.value if checkin.intensity_hint else None,
    })
    return _drop_none({
        "status": checkin.status.value,
        "rpe": checkin.rpe,
        "feeling": checkin.feeling.value,
        "fatigue": checkin.fatigue,
        "sleep": checkin.sleep,
        "pain": pain,
        "note": checkin.note,
        "actual": actual or None,
        "completedAt": (
            format_instant(checkin.completed_at) if checkin.completed_at else None
        ),
    })


def checkin_from_document(doc: Mapping[str, Any]) -> CheckIn:
    """Rebuild a CheckIn. Raises KeyError / ValueError on unusable documents."""
    pain_doc = doc.get("pain") or {}
    actual = doc.get("actual") or {}
    completed_at = doc.get("completedAt")
    hint = actual.get("intensityHint")
    area = pain_doc.get("area")
    return CheckIn(
        status=WorkoutStatus(doc["status"]),
        rpe=doc["rpe"],
        feeling=Feeling(doc["feeling"]),
        fatigue=doc["fatigue"],
        sleep=doc["sleep"],
        pain=PainReport(
            has_pain=bool(pain_doc.get("hasPain", False)),
            area=PainArea(area) if area else None,
            intensity=pain_doc.get("intensity"),
            note=pain_doc.get("note"),
        ),
        note=doc.get("note"),
        actual_duration_min=actual.get("durationMin"),
        intensity_hint=IntensityHint(hint) if hint else None,
        completed_at=parse_instant(completed_at) if completed_at else None,
    )


# ---------------------------------------------------------------------------
# Weekly status and history
# ---------------------------------------------------------------------------


def status_to_document(status: WeeklyAutoStatus) -> dict[str, Any]:
    """Serialize the weekly bundle. Key order is fixed so output is reproducible."""
    return {
        "weekStart": status.week_start.isoformat(),
        "status": status.status.label,
        "stats": {
            "total": status.stats.total,
            "done": status.stats.done,
            "pending": status.stats.pending,
            "skipped": status.stats.skipped,
            "reasons": status.stats.reasons.as_dict(),
        },
        "signals": {
            "avgRpe": status.signals.avg_rpe,
            "avgFatigue": status.signals.avg_fatigue,
            "maxPain": status.signals.max_pain,
        },
        "recommendation": {
            "action": status.recommendation.action.value,
            "title": status.recommendation.title,
            "message": status.recommendation.message,
        },
        "recommendationTriggers": list(status.recommendation_triggers),
        "updatedAt": format_instant(status.updated_at),
    }


def history_entry_to_document(entry: WeeklyHistoryEntry) -> dict[str, Any]:
    return {"weekKey": entry.week_key, **status_to_document(entry.to_status())}


def status_from_document(doc: Mapping[str, Any]) -> WeeklyAutoStatus:
    stats = doc["stats"]
    signals = doc["signals"]
    recommendation = doc["recommendation"]
    reasons = stats.get("reasons") or {}
    return WeeklyAutoStatus(
        week_start=date.fromisoformat(doc["weekStart"]),
        status=Severity.from_label(doc["status"]),
        stats=WeeklyStats(
            total=stats["total"],
            done=stats["done"],
            pending=stats["pending"],
            skipped=stats["skipped"],
            reasons=ReasonTally(**{r.value: int(reasons.get(r.value, 0)) for r in SkipReason}),
        ),
        signals=WeeklySignals(
            avg_rpe=signals.get("avgRpe"),
            avg_fatigue=signals.get("avgFatigue"),
            max_pain=signals.get("maxPain"),
        ),
        recommendation=WeeklyRecommendation(
            action=RecommendationAction(recommendation["action"]),
            title=recommendation["title"],
            message=recommendation["message"],
        ),
        recommendation_triggers=tuple(doc.get("recommendationTriggers") or ()),
        updated_at=parse_instant(doc["updatedAt"], timezone.utc),
    )


def history_entry_from_document(doc: Mapping[str, Any]) -> WeeklyHistoryEntry:
    return WeeklyHistoryEntry.from_status(status_from_document(doc))
