"""Custom exception hierarchy for the timeline compiler."""

from __future__ import annotations


class TimelineError(Exception):
    """Base exception for all workout_timeline errors."""


class InvalidBlockError(TimelineError, ValueError):
    """A block, its params or one of its exercises is malformed."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class TimelineValidationError(TimelineError):
    """A compiled timeline broke one or more structural invariants."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors) or "Timeline is invalid")
        self.errors = list(errors)
