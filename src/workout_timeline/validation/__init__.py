"""Structural validation of compiled timelines."""

from workout_timeline.validation.validator import validate

__all__ = ["validate"]
