"""Execution timeline models — the compiler's output artifact."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from workout_timeline.exceptions import TimelineValidationError
from workout_timeline.models.enums import (
    DEFAULT_ALLOWED_DRIFT_MS,
    DEFAULT_RESYNC_EVERY_MS,
    StepType,
)


@dataclass(frozen=True)
class ExerciseSnapshot:
    """Resolved exercise metadata attached to a work step."""

    id: int
    name: str
    cues: tuple[str, ...] = field(default_factory=tuple)
    equipment: tuple[str, ...] = field(default_factory=tuple)
    muscle_group: str = "Unknown"
    video_url: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class TimelineStep:
    """A single absolute-timestamped step of an execution timeline.

    ``at_ms``/``end_ms`` are offsets from a notional workout start.
    AWAIT_READY steps are zero-width: the player suspends its clock there
    until an external "ready" signal arrives.
    """

    step: int
    step_type: StepType
    at_ms: int
    end_ms: int
    duration_sec: float | None = None
    set: int | None = None
    round: int | None = None
    label: str | None = None
    text: str | None = None
    coach_prompt: str | None = None
    next_step_id: str | None = None
    pre_workout: bool = False
    exercise: ExerciseSnapshot | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> int:
        return self.end_ms - self.at_ms


@dataclass(frozen=True)
class WorkoutHeader:
    name: str
    total_duration_sec: int
    structure: str
    pre_workout_duration_ms: int = 0


@dataclass(frozen=True)
class SyncContract:
    """Clock reconciliation contract emitted for the real-time player."""

    workout_start_epoch_ms: int
    resync_every_ms: int = DEFAULT_RESYNC_EVERY_MS
    allowed_drift_ms: int = DEFAULT_ALLOWED_DRIFT_MS


@dataclass(frozen=True)
class ExecutionTimeline:
    """Complete compiled workout: header, ordered steps and sync contract."""

    workout_header: WorkoutHeader
    execution_timeline: tuple[TimelineStep, ...]
    sync: SyncContract

    @property
    def workout_duration_sec(self) -> float:
        """Duration excluding pre-workout time (what the workout clock shows)."""
        total_ms = self.workout_header.total_duration_sec * 1000
        return (total_ms - self.workout_header.pre_workout_duration_ms) / 1000


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a structural timeline check."""

    valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)

    def raise_for_errors(self) -> None:
        """Raise TimelineValidationError when the timeline is invalid."""
        if not self.valid:
            raise TimelineValidationError(list(self.errors))
