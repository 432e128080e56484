"""Round-transition protocol — the fixed beep/voice/countdown ritual
inserted between rounds of a circuit or superset.

Timeline, relative to T = end of the round's last work step::

    T          end-of-work beep (~600ms, played by the player)
    T+700      round_rest marker -> "round complete" voice cue
    T+3000     countdown pip (220ms)
    T+4000     countdown pip (220ms)
    T+5000     GO (600ms)
    T+5600     next round's first work step

Configured restSec/roundRestSec have no effect here.
"""

from __future__ import annotations

from workout_timeline.models.enums import (
    GO_LABEL,
    ROUND_TRANSITION,
    RoundTransitionTiming,
    StepType,
)
from workout_timeline.models.timeline import TimelineStep


def round_transition_steps(
    anchor_ms: int,
    completed_round: int,
    total_rounds: int,
    timing: RoundTransitionTiming = ROUND_TRANSITION,
) -> list[TimelineStep]:
    """Build the ritual steps for the boundary after ``completed_round``.

    Args:
        anchor_ms: End time (T) of the round's last work step.
        completed_round: 1-based number of the round that just finished.
        total_rounds: Number of rounds in the block.
        timing: Protocol offsets; the default must match the player.

    Returns:
        Unnumbered steps (``step=0``) with absolute timestamps. The caller
        resumes at ``anchor_ms + timing.total_ms``.
    """
    next_round = completed_round + 1
    steps = [
        _cue(
            StepType.ROUND_REST,
            anchor_ms + timing.round_rest_offset_ms,
            timing.round_rest_duration_ms,
            completed_round,
            label=f"Round {completed_round} complete",
            text=f"Round {completed_round} of {total_rounds} done. "
                 f"Round {next_round} coming up.",
        ),
    ]
    pips = len(timing.countdown_offsets_ms)
    for i, offset in enumerate(timing.countdown_offsets_ms):
        steps.append(_cue(
            StepType.COUNTDOWN,
            anchor_ms + offset,
            timing.countdown_duration_ms,
            next_round,
            label=str(pips - i + 1),
        ))
    steps.append(_cue(
        StepType.COUNTDOWN,
        anchor_ms + timing.go_offset_ms,
        timing.go_duration_ms,
        next_round,
        label=GO_LABEL,
    ))
    return steps


def _cue(
    step_type: StepType,
    at_ms: int,
    duration_ms: int,
    round_number: int,
    label: str,
    text: str | None = None,
) -> TimelineStep:
    return TimelineStep(
        step=0,
        step_type=step_type,
        at_ms=at_ms,
        end_ms=at_ms + duration_ms,
        duration_sec=duration_ms / 1000,
        round=round_number,
        label=label,
        text=text,
    )
