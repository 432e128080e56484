"""Coaching cues and coach-facing text for timeline steps.

Turns the catalog's raw coaching text into cue lists, builds the exercise
snapshot carried by work steps, and holds the label/prompt wording the
voice coach reads.
"""

from __future__ import annotations

import re

from workout_timeline.models.block import BlockExercise, PostCardio
from workout_timeline.models.enums import FINISHER_EXERCISE_ID
from workout_timeline.models.timeline import ExerciseSnapshot

# Cue separators in raw coaching text: newlines or semicolons.
_CUE_SPLIT = re.compile(r"[\n;]")
# Leading bullet glyphs authors paste in from docs.
_BULLET_PREFIX = re.compile(r"^[•\-\*]\s*")

_FINISHER_CUES = ("Maintain steady pace", "Control your breathing")

READY_PROMPT = "Take a moment. When you're ready, say 'Ready'."
REP_COUNT_PROMPT = (
    "How many reps did you get? You can say the number, "
    "or just say 'Ready' to continue."
)
GET_ORGANIZED_PROMPT = (
    "Get your equipment organized and find your space. "
    "When you're ready to begin, say 'Ready'."
)


def parse_cues(raw: str | None) -> tuple[str, ...]:
    """Split raw coaching text into individual cues.

    Example: "• Keep core tight\\n- Control the descent; Breathe"
    -> ("Keep core tight", "Control the descent", "Breathe")
    """
    if not raw:
        return ()
    cues = (_BULLET_PREFIX.sub("", part.strip()) for part in _CUE_SPLIT.split(raw))
    return tuple(cue for cue in cues if cue)


def build_exercise_snapshot(exercise: BlockExercise) -> ExerciseSnapshot:
    """Resolve the display snapshot for a work step."""
    equipment = [exercise.equipment_primary, *exercise.equipment_secondary]
    return ExerciseSnapshot(
        id=exercise.exercise_id,
        name=exercise.exercise_name,
        cues=parse_cues(exercise.coaching_bullet_points),
        equipment=tuple(item for item in equipment if item),
        muscle_group=exercise.primary_muscle_group or "Unknown",
        video_url=exercise.video_url or None,
        image_url=exercise.image_url or None,
    )


def build_finisher_snapshot(post_cardio: PostCardio) -> ExerciseSnapshot:
    """Synthetic snapshot for an inline cardio finisher (no catalog entry)."""
    return ExerciseSnapshot(
        id=FINISHER_EXERCISE_ID,
        name=post_cardio.exercise,
        cues=_FINISHER_CUES,
        equipment=(post_cardio.exercise,),
        muscle_group="Cardio",
    )


def intro_text(workout_name: str) -> str:
    return f"Welcome to {workout_name}. Get ready to begin."


def rep_gate_label(target_reps: str) -> str:
    return f"Finished {target_reps} reps?"


def rest_text(next_exercise: BlockExercise | None, next_set: int | None) -> str:
    """Short description of what a rest step leads into."""
    if next_exercise is None:
        return "Rest"
    if next_set is not None:
        return f"Rest before set {next_set}"
    return f"Transition to {next_exercise.exercise_name}"


def block_gate_prompt(finished_block: str, next_block: str) -> str:
    return (
        f"Great work on {finished_block}! Take a moment to rest. "
        f"When you're ready for {next_block}, say 'Ready' or 'Go'."
    )
