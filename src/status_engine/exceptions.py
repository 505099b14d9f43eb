"""Custom exception hierarchy for the status engine."""

from __future__ import annotations


class StatusEngineError(Exception):
    """Base exception for all status_engine errors."""


class MalformedOutcomeError(StatusEngineError):
    """A workout record is missing its date or status, or they cannot be parsed."""

    def __init__(self, message: str, workout_id: str | None = None) -> None:
        super().__init__(message)
        self.workout_id = workout_id
