"""Data models for the timeline compiler."""

from workout_timeline.models.block import (
    Block,
    BlockExercise,
    BlockParams,
    PostCardio,
)
from workout_timeline.models.enums import (
    BlockType,
    Mode,
    Pattern,
    ROUND_TRANSITION,
    RoundTransitionTiming,
    StepType,
)
from workout_timeline.models.timeline import (
    ExecutionTimeline,
    ExerciseSnapshot,
    SyncContract,
    TimelineStep,
    ValidationResult,
    WorkoutHeader,
)

__all__ = [
    "Block",
    "BlockExercise",
    "BlockParams",
    "BlockType",
    "ExecutionTimeline",
    "ExerciseSnapshot",
    "Mode",
    "Pattern",
    "PostCardio",
    "ROUND_TRANSITION",
    "RoundTransitionTiming",
    "StepType",
    "SyncContract",
    "TimelineStep",
    "ValidationResult",
    "WorkoutHeader",
]
