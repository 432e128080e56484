"""Multi-block sequencing — splices independently expanded blocks into one
workout timeline separated by readiness gates."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from workout_timeline.compiler.coaching_cues import (
    GET_ORGANIZED_PROMPT,
    block_gate_prompt,
    intro_text,
)
from workout_timeline.compiler.cursor import StepCursor, renumber_steps
from workout_timeline.compiler.expansion import expand
from workout_timeline.models.block import Block
from workout_timeline.models.enums import (
    ROUND_TRANSITION,
    RoundTransitionTiming,
    StepType,
    WORKOUT_INTRO_MS,
)
from workout_timeline.models.timeline import TimelineStep

logger = logging.getLogger(__name__)


def sequence_blocks(
    blocks: Sequence[Block],
    workout_name: str,
    timing: RoundTransitionTiming = ROUND_TRANSITION,
) -> tuple[list[TimelineStep], int]:
    """Lay out a whole workout.

    Order: "get organized" gate, 10s intro, then each block's steps shifted
    by the running clock, with a "ready for next block" gate between blocks.
    Gates are zero-width; the clock only advances by each block's exact
    compiled duration, so the timeline stays gap-free across blocks.

    Args:
        blocks: Blocks in workout order, each carrying its exercises.
        workout_name: Name used in the intro text.
        timing: Round-transition offsets passed through to expansion.

    Returns:
        (numbered steps, final clock position in ms)
    """
    cursor = StepCursor()
    cursor.marker(
        StepType.AWAIT_READY,
        label="Get organized",
        coach_prompt=GET_ORGANIZED_PROMPT,
        pre_workout=True,
    )
    cursor.timed(
        StepType.INSTRUCTION,
        WORKOUT_INTRO_MS,
        text=intro_text(workout_name),
        pre_workout=True,
    )

    for block_index, block in enumerate(blocks):
        expanded = expand(block, timing=timing)
        cursor.splice(
            expanded.steps, cursor.current_ms, meta={"blockIndex": block_index},
        )
        cursor.current_ms += expanded.duration_ms
        logger.debug(
            "Sequenced block %d %r: %d steps, %d ms",
            block_index, block.name, len(expanded.steps), expanded.duration_ms,
        )

        if block_index < len(blocks) - 1:
            next_block = blocks[block_index + 1]
            cursor.marker(
                StepType.AWAIT_READY,
                label=f"Ready for {next_block.name or f'block {block_index + 2}'}?",
                coach_prompt=block_gate_prompt(
                    block.name or f"block {block_index + 1}",
                    next_block.name or f"block {block_index + 2}",
                ),
            )

    return renumber_steps(cursor.steps), cursor.current_ms
