"""Weekly status dashboard — Streamlit view of an athlete's training-load status.

Run with:
    streamlit run streamlit_app/app.py

Reads the SQLite store at STATUS_DB_PATH; nothing is written from here.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone

import streamlit as st

from athlete_store import AthleteStoreError, WeeklyStatusService
from status_engine.math.trend import history_frame
from status_engine.models.decision_trace import RuleStatus
from status_engine.models.enums import FATIGUE_MAX, PAIN_INTENSITY_MAX, RPE_MAX
from status_engine.week import week_bounds

from helpers import (
    ACTION_LABELS,
    STATUS_COLORS,
    format_progress,
    format_signal,
    format_status,
    format_week_range,
    open_status_service,
    reason_rows,
)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Estado semanal",
    page_icon="🚦",
    layout="wide",
)


@st.cache_resource
def get_service(db_path: str) -> WeeklyStatusService:
    return open_status_service(db_path)


def _render_trace(trace):
    """Render a ClassificationTrace with one line per rule."""
    STATUS_ICONS = {
        RuleStatus.FIRED: "🔴",
        RuleStatus.SKIPPED: "⚪",
        RuleStatus.NOT_APPLICABLE: "⚫",
    }

    for rr in trace.rule_results:
        icon = STATUS_ICONS.get(rr.status, "⚪")
        st.markdown(f"{icon} **{rr.rule_id}** — _{rr.status.name}_: {rr.explanation}")

    if trace.merge_notes:
        st.divider()
        st.markdown(f"**Resultado:** {trace.merge_notes}")


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

st.sidebar.title("Atleta")
db_path = st.sidebar.text_input(
    "Base de datos",
    value=os.path.expanduser(os.environ.get("STATUS_DB_PATH", "~/.status_engine/athletes.db")),
)

try:
    service = get_service(db_path)
    athlete_ids = service.repository.list_athlete_ids()
except AthleteStoreError as e:
    st.error(f"No se pudo abrir la base de datos: {e}")
    st.stop()

if not athlete_ids:
    st.info("No hay atletas en la base de datos.")
    st.stop()

athlete_id = st.sidebar.selectbox("ID de atleta", athlete_ids)
history_limit = st.sidebar.slider("Semanas de historial", min_value=4, max_value=26, value=8)

# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

st.title("Estado semanal")
st.caption("Carga de entrenamiento a partir de los check-ins de la semana")

tab_week, tab_history, tab_trace = st.tabs(["Semana actual", "Historial", "Traza"])

with tab_week:
    status = service.current_status(athlete_id)
    if status is None:
        st.info("Todavía no hay estado calculado para este atleta.")
    else:
        st.subheader(format_week_range(status.week_start))
        st.markdown(
            f'<div style="background:{STATUS_COLORS[status.status]};padding:10px 16px;'
            f'border-radius:6px;font-size:1.3em;">{format_status(status.status)}</div>',
            unsafe_allow_html=True,
        )

        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Completados", format_progress(status.stats))
        c2.metric("RPE medio", format_signal(status.signals.avg_rpe, RPE_MAX))
        c3.metric("Fatiga media", format_signal(status.signals.avg_fatigue, FATIGUE_MAX))
        c4.metric("Dolor máximo", format_signal(status.signals.max_pain, PAIN_INTENSITY_MAX))

        st.subheader(status.recommendation.title)
        st.markdown(status.recommendation.message)
        st.caption(f"Acción: {ACTION_LABELS[status.recommendation.action]}")

        if status.recommendation_triggers:
            st.markdown("**Motivos:** " + ", ".join(status.recommendation_triggers))

        rows = reason_rows(status.stats.reasons)
        if rows:
            with st.expander(f"Entrenos saltados ({status.stats.skipped})"):
                for label, count in rows:
                    st.markdown(f"- {label}: {count}")

        st.caption(f"Actualizado: {status.updated_at.strftime('%Y-%m-%d %H:%M')} UTC")

with tab_history:
    entries = service.history(athlete_id, limit=history_limit)
    if not entries:
        st.info("Sin historial todavía.")
    else:
        frame = history_frame(entries)
        st.line_chart(frame.set_index("week_start")[["avg_rpe", "avg_fatigue", "max_pain"]])
        st.bar_chart(frame.set_index("week_start")[["done", "skipped"]])
        st.dataframe(frame, hide_index=True)

with tab_trace:
    st.caption("Evaluación en vivo de la semana en curso (no se guarda).")
    start, end = week_bounds(datetime.now(timezone.utc), service.tz)
    workouts = service.repository.list_workouts(athlete_id, start, end)
    live_status, trace = service.engine.evaluate_documents(workouts, start.date())
    st.markdown(f"{format_status(live_status.status)} · {len(workouts)} entrenos")
    _render_trace(trace)
