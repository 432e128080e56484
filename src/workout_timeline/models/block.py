"""Block models — the authored input to the timeline compiler."""

from __future__ import annotations

from dataclasses import dataclass, field

from workout_timeline.exceptions import InvalidBlockError
from workout_timeline.models.enums import (
    BlockType,
    DEFAULT_REST_SEC,
    DEFAULT_ROUND_REST_SEC,
    DEFAULT_SETS_PER_EXERCISE,
    DEFAULT_TRANSITION_BLOCK_SEC,
    DEFAULT_TRANSITION_SEC,
    DEFAULT_WORK_SEC,
    Mode,
    Pattern,
)


@dataclass(frozen=True)
class PostCardio:
    """Optional cardio finisher appended after a block's main work."""

    exercise: str
    duration_sec: float


@dataclass(frozen=True)
class BlockParams:
    """Timing parameters of a block.

    ``work_sec`` stays ``None`` when the author did not set it, so rep-gated
    blocks can be told apart from timed ones. Use ``resolved_work_sec`` for
    the effective value.
    """

    sets_per_exercise: int = DEFAULT_SETS_PER_EXERCISE
    work_sec: float | None = None
    rest_sec: float = DEFAULT_REST_SEC
    round_rest_sec: float = DEFAULT_ROUND_REST_SEC   # Accepted, not consulted
    transition_sec: float = DEFAULT_TRANSITION_SEC
    await_ready_before_start: bool = False
    target_reps: str | None = None                  # e.g. "12" or "10-12"
    post_cardio: PostCardio | None = None
    duration_sec: float = DEFAULT_TRANSITION_BLOCK_SEC  # transition blocks only

    def __post_init__(self) -> None:
        if self.sets_per_exercise < 1:
            raise InvalidBlockError(
                f"setsPerExercise must be >= 1, got {self.sets_per_exercise}",
                field="setsPerExercise",
            )
        if self.work_sec is not None and self.work_sec <= 0:
            raise InvalidBlockError(
                f"workSec must be > 0, got {self.work_sec}", field="workSec",
            )
        for name, value in (
            ("restSec", self.rest_sec),
            ("roundRestSec", self.round_rest_sec),
            ("transitionSec", self.transition_sec),
            ("durationSec", self.duration_sec),
        ):
            if value < 0:
                raise InvalidBlockError(
                    f"{name} must be >= 0, got {value}", field=name,
                )
        if self.post_cardio is not None and self.post_cardio.duration_sec <= 0:
            raise InvalidBlockError(
                "postCardio.durationSec must be > 0", field="postCardio",
            )

    @property
    def resolved_work_sec(self) -> float:
        return self.work_sec if self.work_sec is not None else DEFAULT_WORK_SEC


@dataclass(frozen=True)
class BlockExercise:
    """One ordered exercise within a block.

    Display fields are a snapshot resolved upstream by the exercise catalog.
    ``work_sec``/``rest_sec``/``target_reps`` override the block params when
    not None.
    """

    exercise_id: int
    order_index: int
    exercise_name: str
    primary_muscle_group: str | None = None
    equipment_primary: str | None = None
    equipment_secondary: tuple[str, ...] = field(default_factory=tuple)
    coaching_bullet_points: str | None = None   # raw, newline/';' separated
    video_url: str | None = None
    image_url: str | None = None
    work_sec: float | None = None
    rest_sec: float | None = None
    target_reps: str | None = None


@dataclass(frozen=True)
class Block:
    """A single scheduling unit: an exercise grouping plus timing params.

    ``type_name`` keeps the authored type string so unsupported blocks can
    be reported by name.
    """

    block_type: BlockType
    name: str = ""
    description: str = ""
    pattern: Pattern = Pattern.CIRCUIT
    mode: Mode | None = None
    params: BlockParams = field(default_factory=BlockParams)
    exercises: tuple[BlockExercise, ...] = field(default_factory=tuple)
    type_name: str = ""

    @property
    def ordered_exercises(self) -> tuple[BlockExercise, ...]:
        """Exercises sorted by ``order_index`` (stable for ties)."""
        return tuple(sorted(self.exercises, key=lambda ex: ex.order_index))

    def work_sec_for(self, exercise: BlockExercise) -> float:
        if exercise.work_sec is not None:
            return exercise.work_sec
        return self.params.resolved_work_sec

    def rest_sec_for(self, exercise: BlockExercise) -> float:
        if exercise.rest_sec is not None:
            return exercise.rest_sec
        return self.params.rest_sec

    def target_reps_for(self, exercise: BlockExercise) -> str | None:
        return exercise.target_reps or self.params.target_reps

    def is_rep_gated(self, exercise: BlockExercise) -> bool:
        """Legacy rep-based exercise: has a rep target and no explicit work time.

        The rest after such an exercise is replaced by an ``await_ready``
        pause unless the block runs in rep mode.
        """
        if not self.target_reps_for(exercise):
            return False
        return exercise.work_sec is None and self.params.work_sec is None
