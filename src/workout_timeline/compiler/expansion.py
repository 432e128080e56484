"""Step expansion — turns one block into an ordered list of timed steps.

Two traversal orders:

* straight_sets: every set of exercise A, then every set of exercise B.
* circuit / superset / custom: one set of every exercise per round,
  rounds repeat.

After each work step exactly one inter-step policy applies (first match
wins):

1. end of timeline      -> nothing
2. round end, rep mode  -> round-transition protocol
3. rep-gated exercise   -> zero-width await_ready (rest happens off-clock)
4. round end, time mode -> round-transition protocol
5. otherwise            -> timed rest

Straight sets never run the round-transition protocol.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum, auto

from workout_timeline.compiler.coaching_cues import (
    READY_PROMPT,
    REP_COUNT_PROMPT,
    build_exercise_snapshot,
    build_finisher_snapshot,
    intro_text,
    rep_gate_label,
    rest_text,
)
from workout_timeline.compiler.cursor import StepCursor, renumber_steps, seconds_to_ms
from workout_timeline.compiler.round_transition import round_transition_steps
from workout_timeline.models.block import Block, BlockExercise
from workout_timeline.models.enums import (
    BLOCK_INTRO_MS,
    BlockType,
    Mode,
    Pattern,
    ROUND_TRANSITION,
    RoundTransitionTiming,
    StepType,
)
from workout_timeline.models.timeline import TimelineStep

logger = logging.getLogger(__name__)


class RestPolicy(IntEnum):
    """What follows a work step."""

    NONE = auto()
    ROUND_TRANSITION = auto()
    AWAIT_READY = auto()
    TIMED_REST = auto()


@dataclass(frozen=True)
class ExpandedBlock:
    """Steps of one block on its own clock, starting at 0."""

    steps: tuple[TimelineStep, ...]
    duration_ms: int


def choose_rest_policy(
    block: Block,
    exercise: BlockExercise,
    is_last_step: bool,
    is_round_end: bool,
) -> RestPolicy:
    """Pick the inter-step policy after a work step.

    Args:
        block: The block being expanded.
        exercise: The exercise whose work step just ended.
        is_last_step: True for the final work step of the block.
        is_round_end: True for the last exercise of a non-final round of a
            round-based pattern. Always False for straight sets.
    """
    if is_last_step:
        return RestPolicy.NONE
    if is_round_end and block.mode == Mode.REPS:
        return RestPolicy.ROUND_TRANSITION
    if block.is_rep_gated(exercise) and block.mode != Mode.REPS:
        return RestPolicy.AWAIT_READY
    if is_round_end:
        return RestPolicy.ROUND_TRANSITION
    return RestPolicy.TIMED_REST


def expand(
    block: Block,
    exercises: Sequence[BlockExercise] | None = None,
    include_intro: bool = False,
    workout_name: str | None = None,
    timing: RoundTransitionTiming = ROUND_TRANSITION,
) -> ExpandedBlock:
    """Expand a block into numbered, absolutely-timed steps.

    Args:
        block: The block to expand. Never mutated.
        exercises: Ordered exercises; defaults to the block's own exercises
            sorted by ``order_index``.
        include_intro: Prepend a pre-workout instruction step.
        workout_name: Name used in the intro text; defaults to the block name.
        timing: Round-transition offsets.

    Returns:
        An ExpandedBlock whose ``duration_ms`` is the final clock position.
        Unsupported block types yield no block steps.
    """
    if exercises is None:
        exercises = block.ordered_exercises
    cursor = StepCursor()

    if include_intro:
        cursor.timed(
            StepType.INSTRUCTION,
            BLOCK_INTRO_MS,
            text=intro_text(workout_name or block.name),
            pre_workout=True,
        )

    if block.params.await_ready_before_start:
        cursor.marker(
            StepType.AWAIT_READY,
            label="Ready to start?",
            coach_prompt=READY_PROMPT,
        )

    if block.block_type == BlockType.CUSTOM_SEQUENCE:
        if block.pattern == Pattern.STRAIGHT_SETS:
            _expand_straight_sets(cursor, block, exercises)
        else:
            _expand_rounds(cursor, block, exercises, timing)
        _append_finisher(cursor, block)
    elif block.block_type == BlockType.TRANSITION:
        cursor.timed(
            StepType.TRANSITION,
            seconds_to_ms(block.params.duration_sec),
            label=block.name,
            text=block.description or None,
        )
    else:
        logger.warning(
            "Block %r has unsupported type %r; it compiles to no steps",
            block.name, block.type_name or block.block_type.name,
        )

    return ExpandedBlock(
        steps=tuple(renumber_steps(cursor.steps)),
        duration_ms=cursor.current_ms,
    )


# ---------------------------------------------------------------------------
# Traversal orders
# ---------------------------------------------------------------------------


def _expand_straight_sets(
    cursor: StepCursor,
    block: Block,
    exercises: Sequence[BlockExercise],
) -> None:
    sets = block.params.sets_per_exercise
    for ex_index, exercise in enumerate(exercises):
        is_last_exercise = ex_index == len(exercises) - 1
        for set_number in range(1, sets + 1):
            # round numbers the exercise position in straight sets
            _work(cursor, block, exercise, ex_index, set_number, ex_index + 1)

            is_last_set = set_number == sets
            if is_last_set:
                next_exercise = None if is_last_exercise else exercises[ex_index + 1]
                next_set = None
            else:
                next_exercise, next_set = exercise, set_number + 1

            policy = choose_rest_policy(
                block, exercise,
                is_last_step=is_last_set and is_last_exercise,
                is_round_end=False,
            )
            _apply_policy(
                cursor, block, exercise, policy,
                rest_label=rest_text(next_exercise, next_set),
            )


def _expand_rounds(
    cursor: StepCursor,
    block: Block,
    exercises: Sequence[BlockExercise],
    timing: RoundTransitionTiming,
) -> None:
    rounds = block.params.sets_per_exercise
    for round_number in range(1, rounds + 1):
        is_last_round = round_number == rounds
        for ex_index, exercise in enumerate(exercises):
            _work(cursor, block, exercise, ex_index, round_number, round_number)

            is_last_exercise = ex_index == len(exercises) - 1
            policy = choose_rest_policy(
                block, exercise,
                is_last_step=is_last_exercise and is_last_round,
                is_round_end=is_last_exercise and not is_last_round,
            )
            if policy == RestPolicy.ROUND_TRANSITION:
                anchor = cursor.current_ms
                cursor.extend(
                    round_transition_steps(anchor, round_number, rounds, timing),
                    advance_to_ms=anchor + timing.total_ms,
                )
                continue

            next_exercise = None if is_last_exercise else exercises[ex_index + 1]
            _apply_policy(
                cursor, block, exercise, policy,
                rest_label=rest_text(next_exercise, None),
                round_number=round_number,
            )


# ---------------------------------------------------------------------------
# Step builders
# ---------------------------------------------------------------------------


def _work(
    cursor: StepCursor,
    block: Block,
    exercise: BlockExercise,
    ex_index: int,
    set_number: int,
    round_number: int,
) -> None:
    target_reps = block.target_reps_for(exercise)
    cursor.timed(
        StepType.WORK,
        seconds_to_ms(block.work_sec_for(exercise)),
        set=set_number,
        round=round_number,
        label=exercise.exercise_name,
        text=f"{target_reps} reps" if target_reps else None,
        exercise=build_exercise_snapshot(exercise),
        meta={"exerciseIndex": ex_index},
    )


def _apply_policy(
    cursor: StepCursor,
    block: Block,
    exercise: BlockExercise,
    policy: RestPolicy,
    rest_label: str,
    round_number: int | None = None,
) -> None:
    if policy == RestPolicy.AWAIT_READY:
        cursor.marker(
            StepType.AWAIT_READY,
            label=rep_gate_label(block.target_reps_for(exercise) or ""),
            coach_prompt=REP_COUNT_PROMPT,
            round=round_number,
        )
    elif policy == RestPolicy.TIMED_REST:
        cursor.timed(
            StepType.REST,
            seconds_to_ms(block.rest_sec_for(exercise)),
            label="Rest",
            text=rest_label,
            round=round_number,
        )


def _append_finisher(cursor: StepCursor, block: Block) -> None:
    post_cardio = block.params.post_cardio
    if post_cardio is None:
        return
    cursor.timed(
        StepType.TRANSITION,
        seconds_to_ms(block.params.transition_sec),
        label=f"Transition to {post_cardio.exercise}",
    )
    cursor.timed(
        StepType.WORK,
        seconds_to_ms(post_cardio.duration_sec),
        set=1,
        round=1,
        label="Cardio Finisher",
        exercise=build_finisher_snapshot(post_cardio),
    )
