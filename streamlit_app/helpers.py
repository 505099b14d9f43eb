"""Utility helpers bridging the Streamlit UI and the weekly status store.

Pure functions for formatting and a couple of thin readers over the
repository, kept out of app.py so they can be tested without Streamlit.
"""

from __future__ import annotations

from datetime import date, timedelta
from pathlib import Path

from athlete_store import SQLiteRepository, WeeklyStatusService
from status_engine.models.enums import RecommendationAction, Severity, SkipReason
from status_engine.models.weekly import ReasonTally, WeeklyStats

# ---------------------------------------------------------------------------
# Labels and colors
# ---------------------------------------------------------------------------

STATUS_LABELS: dict[Severity, str] = {
    Severity.GREEN: "🟢 Verde",
    Severity.YELLOW: "🟡 Amarillo",
    Severity.RED: "🔴 Rojo",
}

STATUS_COLORS: dict[Severity, str] = {
    Severity.GREEN: "#2ECC71",
    Severity.YELLOW: "#F5B041",
    Severity.RED: "#E74C3C",
}

ACTION_LABELS: dict[RecommendationAction, str] = {
    RecommendationAction.REST: "Descanso",
    RecommendationAction.REDUCE: "Reducir carga",
    RecommendationAction.CONTINUE: "Continuar",
}

REASON_LABELS: dict[SkipReason, str] = {
    SkipReason.INJURY: "Lesión",
    SkipReason.SICK: "Enfermedad",
    SkipReason.FATIGUE: "Fatiga",
    SkipReason.TIME: "Tiempo",
    SkipReason.OTHER: "Otro",
}

MONTH_ABBR = ("ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sep", "oct", "nov", "dic")


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_status(status: Severity) -> str:
    """e.g. Severity.YELLOW -> '🟡 Amarillo'."""
    return STATUS_LABELS[status]


def format_signal(value: float | None, scale: int | None = None) -> str:
    """One-decimal signal, '--' when absent. e.g. 7.0, 10 -> '7.0/10'."""
    if value is None:
        return "--"
    text = f"{value:.1f}"
    return f"{text}/{scale}" if scale else text


def format_progress(stats: WeeklyStats) -> str:
    """e.g. 3 of 4 done -> '3/4 (75%)'. An empty week has no percentage."""
    if stats.pct_done is None:
        return f"{stats.done}/{stats.total}"
    return f"{stats.done}/{stats.total} ({stats.pct_done:.0f}%)"


def format_week_range(monday: date) -> str:
    """e.g. 2026-03-02 -> '2–8 mar 2026'; a week across months names both."""
    sunday = monday + timedelta(days=6)
    if monday.month == sunday.month:
        return f"{monday.day}–{sunday.day} {MONTH_ABBR[sunday.month - 1]} {sunday.year}"
    if monday.year == sunday.year:
        return (
            f"{monday.day} {MONTH_ABBR[monday.month - 1]} – "
            f"{sunday.day} {MONTH_ABBR[sunday.month - 1]} {sunday.year}"
        )
    return (
        f"{monday.day} {MONTH_ABBR[monday.month - 1]} {monday.year} – "
        f"{sunday.day} {MONTH_ABBR[sunday.month - 1]} {sunday.year}"
    )


def reason_rows(reasons: ReasonTally) -> list[tuple[str, int]]:
    """Non-zero skip reasons as (label, count), in reason order."""
    return [(REASON_LABELS[r], reasons[r]) for r in SkipReason if reasons[r] > 0]


# ---------------------------------------------------------------------------
# Store access
# ---------------------------------------------------------------------------


def open_status_service(db_path: Path | str) -> WeeklyStatusService:
    """Read/write status service over the SQLite store at *db_path*."""
    return WeeklyStatusService(SQLiteRepository(db_path))
