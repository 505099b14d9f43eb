"""Serialization module — map engine models to stored documents and back."""

from status_engine.serialization.documents import (
    checkin_from_document,
    checkin_to_document,
    format_instant,
    history_entry_from_document,
    history_entry_to_document,
    outcome_from_document,
    parse_instant,
    status_from_document,
    status_to_document,
    summary_from_document,
    summary_to_document,
)

__all__ = [
    "checkin_from_document",
    "checkin_to_document",
    "format_instant",
    "history_entry_from_document",
    "history_entry_to_document",
    "outcome_from_document",
    "parse_instant",
    "status_from_document",
    "status_to_document",
    "summary_from_document",
    "summary_to_document",
]
