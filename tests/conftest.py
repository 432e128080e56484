"""Shared test fixtures: block exercises, blocks and a pinned compiler."""

from __future__ import annotations

from typing import Callable

import pytest

from workout_timeline.compiler import TimelineCompiler
from workout_timeline.models.block import Block, BlockExercise, BlockParams
from workout_timeline.models.enums import BlockType, Mode, Pattern

FIXED_EPOCH_MS = 1_760_000_000_000


@pytest.fixture
def exercise_factory() -> Callable[..., BlockExercise]:
    """Factory fixture for BlockExercise instances.

    Usage:
        ex = exercise_factory(1, "Push-up", target_reps="12")
    """

    def factory(exercise_id: int = 1, name: str | None = None, **overrides) -> BlockExercise:
        defaults = dict(
            exercise_id=exercise_id,
            order_index=exercise_id - 1,
            exercise_name=name or f"Exercise {exercise_id}",
            primary_muscle_group="Chest",
            equipment_primary="Dumbbell",
            coaching_bullet_points="Keep core tight\nControl the descent",
        )
        defaults.update(overrides)
        return BlockExercise(**defaults)

    return factory


@pytest.fixture
def block_factory(exercise_factory) -> Callable[..., Block]:
    """Factory fixture for custom_sequence blocks.

    Usage:
        block = block_factory(Pattern.CIRCUIT, n_exercises=2, sets_per_exercise=2,
                              work_sec=20, rest_sec=10)
    """

    def factory(
        pattern: Pattern = Pattern.CIRCUIT,
        mode: Mode | None = Mode.TIME,
        n_exercises: int = 2,
        exercises: tuple[BlockExercise, ...] | None = None,
        name: str = "Test Block",
        block_type: BlockType = BlockType.CUSTOM_SEQUENCE,
        **params,
    ) -> Block:
        if exercises is None:
            exercises = tuple(exercise_factory(i) for i in range(1, n_exercises + 1))
        return Block(
            block_type=block_type,
            name=name,
            pattern=pattern,
            mode=mode,
            params=BlockParams(**params),
            exercises=exercises,
        )

    return factory


@pytest.fixture
def compiler() -> TimelineCompiler:
    """Compiler with a pinned sync anchor so outputs are reproducible."""
    return TimelineCompiler(workout_start_epoch_ms=FIXED_EPOCH_MS)
