"""Enumerations and timing constants for the timeline compiler.

The round-transition offsets are shared with the real-time player and must
match it to the millisecond.
"""

from dataclasses import dataclass
from enum import IntEnum, auto


class BlockType(IntEnum):
    """Kind of scheduling unit a block represents."""

    UNSUPPORTED = 0     # Any type string the compiler does not know
    CUSTOM_SEQUENCE = 1
    TRANSITION = 2


class Pattern(IntEnum):
    """Traversal order for sets and exercises within a block."""

    STRAIGHT_SETS = auto()   # All sets of exercise A, then exercise B
    SUPERSET = auto()
    CIRCUIT = auto()
    CUSTOM = auto()

    @property
    def is_round_based(self) -> bool:
        """True when one set of every exercise forms a round."""
        return self is not Pattern.STRAIGHT_SETS


class Mode(IntEnum):
    """How a block measures effort."""

    TIME = auto()
    REPS = auto()


class StepType(IntEnum):
    """Timeline step types understood by the player and the coach."""

    INSTRUCTION = 1
    WORK = 2
    REST = 3
    ROUND_REST = 4
    COUNTDOWN = 5
    TRANSITION = 6
    AWAIT_READY = 7   # Zero-width suspension marker
    HOLD = 8
    AMRAP_LOOP = 9
    EMOM_WINDOW = 10


# ---------------------------------------------------------------------------
# Round-transition protocol
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RoundTransitionTiming:
    """Millisecond offsets of the round-transition ritual, relative to the
    end of the round's last work step (T).

    The player owns the ~600ms end-of-work beep at T; the "round complete"
    voice cue waits for it to clear.
    """

    round_rest_offset_ms: int = 700
    round_rest_duration_ms: int = 100
    countdown_offsets_ms: tuple[int, ...] = (3000, 4000)
    countdown_duration_ms: int = 220
    go_offset_ms: int = 5000
    go_duration_ms: int = 600

    @property
    def total_ms(self) -> int:
        """Time from T until the next round's first work step (5600ms)."""
        return self.go_offset_ms + self.go_duration_ms


ROUND_TRANSITION = RoundTransitionTiming()

# Label of the final countdown cue; the next round starts at its end
GO_LABEL = "GO"

# ---------------------------------------------------------------------------
# Block parameter defaults
# ---------------------------------------------------------------------------
DEFAULT_SETS_PER_EXERCISE = 1
DEFAULT_WORK_SEC = 30
DEFAULT_REST_SEC = 30
DEFAULT_ROUND_REST_SEC = 0
DEFAULT_TRANSITION_SEC = 0
DEFAULT_TRANSITION_BLOCK_SEC = 60   # Standalone transition blocks

# ---------------------------------------------------------------------------
# Pre-workout steps
# ---------------------------------------------------------------------------
BLOCK_INTRO_MS = 5_000      # Optional intro for a single compiled block
WORKOUT_INTRO_MS = 10_000   # Intro before a multi-block workout

# ---------------------------------------------------------------------------
# Player sync contract
# ---------------------------------------------------------------------------
DEFAULT_RESYNC_EVERY_MS = 15_000
DEFAULT_ALLOWED_DRIFT_MS = 250

# Synthetic exercise id for inline finishers that have no catalog entry
FINISHER_EXERCISE_ID = 0
