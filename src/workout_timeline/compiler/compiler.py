"""TimelineCompiler — orchestrates block expansion into execution timelines.

Compiles either a single block or an ordered list of blocks into an
ExecutionTimeline carrying the header totals and the player sync contract.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Sequence
from dataclasses import dataclass

from workout_timeline import config
from workout_timeline.compiler.expansion import expand
from workout_timeline.compiler.sequencer import sequence_blocks
from workout_timeline.models.block import Block, BlockExercise
from workout_timeline.models.enums import ROUND_TRANSITION, RoundTransitionTiming
from workout_timeline.models.timeline import (
    ExecutionTimeline,
    SyncContract,
    TimelineStep,
    WorkoutHeader,
)

logger = logging.getLogger(__name__)

MULTI_BLOCK_STRUCTURE = "multi-block"


@dataclass(frozen=True)
class CompileOptions:
    """Options for compiling a single block."""

    workout_name: str
    workout_structure: str | None = None
    include_intro: bool = False


class TimelineCompiler:
    """Compiles blocks into execution timelines.

    Usage::

        compiler = TimelineCompiler()
        timeline = compiler.compile_workout(blocks, "Full Session")
        single = compiler.compile_block(block, CompileOptions("Legs"))

    ``workout_start_epoch_ms`` pins the sync anchor; left as None the wall
    clock at compile time is used.
    """

    def __init__(
        self,
        resync_every_ms: int | None = None,
        allowed_drift_ms: int | None = None,
        workout_start_epoch_ms: int | None = None,
        timing: RoundTransitionTiming = ROUND_TRANSITION,
    ) -> None:
        self.resync_every_ms = (
            resync_every_ms if resync_every_ms is not None else config.RESYNC_EVERY_MS
        )
        self.allowed_drift_ms = (
            allowed_drift_ms if allowed_drift_ms is not None else config.ALLOWED_DRIFT_MS
        )
        self.workout_start_epoch_ms = workout_start_epoch_ms
        self.timing = timing

    def compile_block(
        self,
        block: Block,
        options: CompileOptions,
        exercises: Sequence[BlockExercise] | None = None,
    ) -> ExecutionTimeline:
        """Compile one block into a standalone timeline.

        Args:
            block: Block to compile.
            options: Name, structure label and intro flag.
            exercises: Ordered exercises; defaults to the block's own.

        Returns:
            The block's ExecutionTimeline. Header ``structure`` falls back
            to the block type name.
        """
        logger.debug(
            "Compiling block %r type=%s pattern=%s mode=%s params=%s",
            block.name, block.block_type.name, block.pattern.name,
            block.mode.name if block.mode is not None else None, block.params,
        )
        expanded = expand(
            block,
            exercises,
            include_intro=options.include_intro,
            workout_name=options.workout_name,
            timing=self.timing,
        )
        structure = options.workout_structure or (
            block.type_name or block.block_type.name.lower()
        )
        return self._assemble(
            options.workout_name, structure, expanded.steps, expanded.duration_ms,
        )

    def compile_workout(
        self, blocks: Sequence[Block], workout_name: str,
    ) -> ExecutionTimeline:
        """Compile an ordered list of blocks into a single workout timeline."""
        steps, duration_ms = sequence_blocks(blocks, workout_name, self.timing)
        logger.info(
            "Compiled workout %r: %d blocks, %d steps, %d ms",
            workout_name, len(blocks), len(steps), duration_ms,
        )
        return self._assemble(workout_name, MULTI_BLOCK_STRUCTURE, steps, duration_ms)

    def _assemble(
        self,
        name: str,
        structure: str,
        steps: Sequence[TimelineStep],
        duration_ms: int,
    ) -> ExecutionTimeline:
        pre_workout_ms = sum(s.duration_ms for s in steps if s.pre_workout)
        start_epoch_ms = self.workout_start_epoch_ms
        if start_epoch_ms is None:
            start_epoch_ms = int(time.time() * 1000)
        return ExecutionTimeline(
            workout_header=WorkoutHeader(
                name=name,
                total_duration_sec=math.ceil(duration_ms / 1000),
                structure=structure,
                pre_workout_duration_ms=pre_workout_ms,
            ),
            execution_timeline=tuple(steps),
            sync=SyncContract(
                workout_start_epoch_ms=start_epoch_ms,
                resync_every_ms=self.resync_every_ms,
                allowed_drift_ms=self.allowed_drift_ms,
            ),
        )


def compile_block(
    block: Block,
    options: CompileOptions,
    exercises: Sequence[BlockExercise] | None = None,
) -> ExecutionTimeline:
    """Compile one block with a default TimelineCompiler."""
    return TimelineCompiler().compile_block(block, options, exercises)


def compile_workout(blocks: Sequence[Block], workout_name: str) -> ExecutionTimeline:
    """Compile several blocks with a default TimelineCompiler."""
    return TimelineCompiler().compile_workout(blocks, workout_name)
