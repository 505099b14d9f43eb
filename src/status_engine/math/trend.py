"""Weekly history trend table for dashboards."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from status_engine.models.weekly import WeeklyHistoryEntry

TREND_COLUMNS = (
    "week_key",
    "week_start",
    "status",
    "severity",
    "done",
    "total",
    "skipped",
    "avg_rpe",
    "avg_fatigue",
    "max_pain",
    "action",
)


def history_frame(entries: Iterable[WeeklyHistoryEntry]) -> pd.DataFrame:
    """Tabulate history entries, one row per week, oldest week first.

    Missing signals become NaN so the signal columns stay numeric and can
    be charted directly.
    """
    rows = [
        {
            "week_key": e.week_key,
            "week_start": pd.Timestamp(e.week_start),
            "status": e.status.label,
            "severity": int(e.status),
            "done": e.stats.done,
            "total": e.stats.total,
            "skipped": e.stats.skipped,
            "avg_rpe": e.signals.avg_rpe,
            "avg_fatigue": e.signals.avg_fatigue,
            "max_pain": e.signals.max_pain,
            "action": e.recommendation.action.value,
        }
        for e in entries
    ]
    if not rows:
        return pd.DataFrame(columns=list(TREND_COLUMNS))

    frame = pd.DataFrame(rows, columns=list(TREND_COLUMNS))
    for column in ("avg_rpe", "avg_fatigue", "max_pain"):
        frame[column] = pd.to_numeric(frame[column], errors="coerce")
    return frame.sort_values("week_start").reset_index(drop=True)
