"""Step accumulation on a running millisecond clock."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from workout_timeline.models.enums import StepType
from workout_timeline.models.timeline import TimelineStep


class StepCursor:
    """Appends steps back-to-back on a running clock.

    Steps are created with ``step=0``; ``renumber_steps`` assigns the final
    1-based numbers once the whole list is known.

    Usage::

        cursor = StepCursor()
        cursor.timed(StepType.WORK, 30_000, set=1)
        cursor.marker(StepType.AWAIT_READY, label="Ready?")
        steps = renumber_steps(cursor.steps)
    """

    def __init__(self, start_ms: int = 0) -> None:
        self.current_ms = start_ms
        self.steps: list[TimelineStep] = []

    def timed(self, step_type: StepType, duration_ms: int, **fields) -> TimelineStep:
        """Append a step lasting ``duration_ms`` and advance the clock."""
        step = TimelineStep(
            step=0,
            step_type=step_type,
            at_ms=self.current_ms,
            end_ms=self.current_ms + duration_ms,
            duration_sec=duration_ms / 1000,
            **fields,
        )
        self.steps.append(step)
        self.current_ms = step.end_ms
        return step

    def marker(self, step_type: StepType, **fields) -> TimelineStep:
        """Append a zero-width step. The clock does not move."""
        step = TimelineStep(
            step=0,
            step_type=step_type,
            at_ms=self.current_ms,
            end_ms=self.current_ms,
            **fields,
        )
        self.steps.append(step)
        return step

    def extend(self, steps: Iterable[TimelineStep], advance_to_ms: int) -> None:
        """Append pre-timed steps and jump the clock to ``advance_to_ms``."""
        self.steps.extend(steps)
        self.current_ms = advance_to_ms

    def splice(
        self,
        steps: Iterable[TimelineStep],
        offset_ms: int,
        meta: dict | None = None,
    ) -> None:
        """Append steps compiled on their own clock, shifted by ``offset_ms``.

        ``meta`` entries are merged into every spliced step's meta. The clock
        itself is left alone; callers advance it by the spliced duration.
        """
        for step in steps:
            self.steps.append(dataclasses.replace(
                step,
                at_ms=step.at_ms + offset_ms,
                end_ms=step.end_ms + offset_ms,
                meta={**step.meta, **(meta or {})},
            ))


def renumber_steps(steps: Iterable[TimelineStep], start: int = 1) -> list[TimelineStep]:
    """Assign sequential step numbers and point await_ready gates at their successor."""
    numbered: list[TimelineStep] = []
    for number, step in enumerate(steps, start=start):
        next_step_id = step.next_step_id
        if step.step_type == StepType.AWAIT_READY:
            next_step_id = f"step-{number + 1}"
        numbered.append(dataclasses.replace(
            step, step=number, next_step_id=next_step_id,
        ))
    return numbered


def seconds_to_ms(seconds: float) -> int:
    """Authored seconds (whole or fractional) to clock milliseconds."""
    return round(seconds * 1000)
