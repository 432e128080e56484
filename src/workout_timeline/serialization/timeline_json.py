"""JSON serialization for ExecutionTimeline objects.

Converts an internal ExecutionTimeline into the camelCase wire format read
by the real-time player and the voice coach. Optional fields that are unset
are omitted.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json

from workout_timeline.models.enums import StepType
from workout_timeline.models.timeline import (
    ExecutionTimeline,
    ExerciseSnapshot,
    TimelineStep,
)

# StepType -> wire "type" key. Must cover every StepType.
STEP_TYPE_KEYS: dict[StepType, str] = {
    StepType.INSTRUCTION: "instruction",
    StepType.WORK: "work",
    StepType.REST: "rest",
    StepType.ROUND_REST: "round_rest",
    StepType.COUNTDOWN: "countdown",
    StepType.TRANSITION: "transition",
    StepType.AWAIT_READY: "await_ready",
    StepType.HOLD: "hold",
    StepType.AMRAP_LOOP: "amrap_loop",
    StepType.EMOM_WINDOW: "emom_window",
}

# Optional step attributes -> wire keys, in output order.
_OPTIONAL_STEP_FIELDS = (
    ("duration_sec", "durationSec"),
    ("set", "set"),
    ("round", "round"),
    ("label", "label"),
    ("text", "text"),
    ("coach_prompt", "coachPrompt"),
    ("next_step_id", "nextStepId"),
)


def to_timeline_json(timeline: ExecutionTimeline) -> dict:
    """Convert an ExecutionTimeline to a JSON-ready dict."""
    header = timeline.workout_header
    return {
        "workoutHeader": {
            "name": header.name,
            "totalDurationSec": header.total_duration_sec,
            "structure": header.structure,
            "preWorkoutDurationMs": header.pre_workout_duration_ms,
        },
        "executionTimeline": [
            _convert_step(step) for step in timeline.execution_timeline
        ],
        "sync": {
            "workoutStartEpochMs": timeline.sync.workout_start_epoch_ms,
            "resyncEveryMs": timeline.sync.resync_every_ms,
            "allowedDriftMs": timeline.sync.allowed_drift_ms,
        },
    }


def to_timeline_json_string(timeline: ExecutionTimeline, indent: int = 2) -> str:
    """Convert an ExecutionTimeline to a JSON string."""
    return json.dumps(to_timeline_json(timeline), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _convert_step(step: TimelineStep) -> dict:
    result = {
        "step": step.step,
        "type": STEP_TYPE_KEYS[step.step_type],
        "atMs": step.at_ms,
        "endMs": step.end_ms,
    }
    for attr, key in _OPTIONAL_STEP_FIELDS:
        value = getattr(step, attr)
        if value is not None:
            result[key] = _whole(value) if attr == "duration_sec" else value

    if step.pre_workout:
        result["preWorkout"] = True
    if step.exercise is not None:
        result["exercise"] = _convert_exercise(step.exercise)
    if step.meta:
        result["meta"] = dict(step.meta)
    return result


def _convert_exercise(exercise: ExerciseSnapshot) -> dict:
    result = {
        "id": exercise.id,
        "name": exercise.name,
        "cues": list(exercise.cues),
        "equipment": list(exercise.equipment),
        "muscleGroup": exercise.muscle_group,
    }
    if exercise.video_url:
        result["videoUrl"] = exercise.video_url
    if exercise.image_url:
        result["imageUrl"] = exercise.image_url
    return result


def _whole(value: float) -> float | int:
    """Render 30.0 as 30 and keep fractional values like 0.22."""
    return int(value) if float(value).is_integer() else value
