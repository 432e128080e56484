"""Timeline validator — post-compile structural checks.

Rules, checked for every step i against step i+1:
- step numbers run 1, 2, 3, ...
- start times are non-negative
- end >= start, except await_ready markers
- work steps carry a resolved exercise
- no gap or overlap between consecutive steps, except after await_ready
  markers and the silent stretches inside the round-transition ritual

Violations are collected, never raised.
"""

from __future__ import annotations

import logging

from workout_timeline.models.enums import GO_LABEL, StepType
from workout_timeline.models.timeline import (
    ExecutionTimeline,
    TimelineStep,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def validate(timeline: ExecutionTimeline) -> ValidationResult:
    """Check a compiled timeline's structural invariants.

    Args:
        timeline: Any ExecutionTimeline, compiled or hand-built.

    Returns:
        ValidationResult with every violation found, in step order.
    """
    steps = timeline.execution_timeline
    errors: list[str] = []

    for i, step in enumerate(steps):
        next_step = steps[i + 1] if i + 1 < len(steps) else None

        if step.step != i + 1:
            errors.append(f"Step {i + 1}: incorrect step number ({step.step})")

        if step.at_ms < 0:
            errors.append(f"Step {step.step}: negative start time")

        if step.end_ms < step.at_ms and step.step_type != StepType.AWAIT_READY:
            errors.append(f"Step {step.step}: end time before start time")

        if next_step is not None:
            error = _check_adjacency(step, next_step)
            if error:
                errors.append(error)

        if step.step_type == StepType.WORK and step.exercise is None:
            errors.append(f"Step {step.step}: work step missing exercise")

    logger.debug(
        "Validated %r: %d steps, %d errors",
        timeline.workout_header.name, len(steps), len(errors),
    )
    return ValidationResult(valid=not errors, errors=tuple(errors))


def _check_adjacency(step: TimelineStep, next_step: TimelineStep) -> str | None:
    if step.step_type == StepType.AWAIT_READY or step.end_ms == next_step.at_ms:
        return None
    if step.end_ms > next_step.at_ms:
        return (
            f"Overlap between step {step.step} and {next_step.step}: "
            f"{step.end_ms} → {next_step.at_ms}"
        )
    if _is_ritual_gap(step, next_step):
        return None
    return (
        f"Gap between step {step.step} and {next_step.step}: "
        f"{step.end_ms} → {next_step.at_ms}"
    )


def _is_ritual_gap(step: TimelineStep, next_step: TimelineStep) -> bool:
    """Silent stretches the round-transition ritual leaves on purpose.

    Allowed: end of work -> round_rest, round_rest -> first pip and
    pip -> next pip or GO. GO and whatever follows it must be contiguous.
    """
    if next_step.step_type == StepType.ROUND_REST:
        return step.step_type == StepType.WORK
    if next_step.step_type != StepType.COUNTDOWN:
        return False
    if step.step_type == StepType.ROUND_REST:
        return True
    return step.step_type == StepType.COUNTDOWN and step.label != GO_LABEL
