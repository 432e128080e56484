"""Utility helpers bridging the Streamlit preview and the timeline compiler.

Pure functions for formatting, tabulating and loading sample blocks.
"""

from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from workout_timeline.models.block import Block
from workout_timeline.models.enums import StepType
from workout_timeline.models.timeline import ExecutionTimeline, TimelineStep
from workout_timeline.serialization import blocks_from_json
from workout_timeline.serialization.timeline_json import STEP_TYPE_KEYS

SAMPLES_DIR = Path(__file__).parent / "samples"

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_clock(ms: int, pre_workout_ms: int = 0) -> str:
    """Workout-clock time of an offset, excluding pre-workout time.

    e.g. 75_000 -> '1:15'; offsets inside the pre-workout window -> 'Ready...'.
    """
    adjusted = ms - pre_workout_ms
    if adjusted < 0:
        return "Ready..."
    total_seconds = adjusted // 1000
    return f"{total_seconds // 60}:{total_seconds % 60:02d}"


def format_duration_ms(ms: int) -> str:
    """e.g. 30_000 -> '30s', 220 -> '0.22s', 90_000 -> '1m 30s'."""
    if ms <= 0:
        return "--"
    if ms % 1000:
        return f"{ms / 1000:g}s"
    seconds = ms // 1000
    m, s = divmod(seconds, 60)
    if m and s:
        return f"{m}m {s}s"
    if m:
        return f"{m}m"
    return f"{s}s"


def describe_step(step: TimelineStep) -> str:
    """One-line description for the preview list."""
    if step.exercise is not None:
        return step.exercise.name
    return step.label or step.text or STEP_LABELS[step.step_type]


# ---------------------------------------------------------------------------
# Color maps
# ---------------------------------------------------------------------------

STEP_COLORS: dict[StepType, str] = {
    StepType.INSTRUCTION: "#D7BDE2",   # lavender
    StepType.WORK: "#2ECC71",          # green
    StepType.REST: "#AED6F1",          # pastel blue
    StepType.ROUND_REST: "#4A90D9",    # blue
    StepType.COUNTDOWN: "#FF8C00",     # orange
    StepType.TRANSITION: "#F9E79F",    # yellow
    StepType.AWAIT_READY: "#D5DBDB",   # grey
    StepType.HOLD: "#82E0AA",
    StepType.AMRAP_LOOP: "#E74C3C",
    StepType.EMOM_WINDOW: "#8E44AD",
}

STEP_LABELS: dict[StepType, str] = {
    step_type: key.replace("_", " ").title()
    for step_type, key in STEP_TYPE_KEYS.items()
}


# ---------------------------------------------------------------------------
# Tabulation
# ---------------------------------------------------------------------------


def timeline_to_frame(timeline: ExecutionTimeline) -> pd.DataFrame:
    """One row per step, with workout-clock times for display."""
    pre_ms = timeline.workout_header.pre_workout_duration_ms
    rows = [
        {
            "step": s.step,
            "type": STEP_TYPE_KEYS[s.step_type],
            "clock": "Ready..." if s.pre_workout else format_clock(s.at_ms, pre_ms),
            "at_ms": s.at_ms,
            "end_ms": s.end_ms,
            "duration": format_duration_ms(s.duration_ms),
            "set": s.set,
            "round": s.round,
            "what": describe_step(s),
            "coach_prompt": s.coach_prompt or "",
        }
        for s in timeline.execution_timeline
    ]
    return pd.DataFrame(
        rows,
        columns=[
            "step", "type", "clock", "at_ms", "end_ms", "duration",
            "set", "round", "what", "coach_prompt",
        ],
    )


def time_by_step_type(timeline: ExecutionTimeline) -> pd.DataFrame:
    """Total seconds and step count per step type, largest first."""
    frame = pd.DataFrame(
        [
            {"type": STEP_TYPE_KEYS[s.step_type], "seconds": s.duration_ms / 1000}
            for s in timeline.execution_timeline
        ],
        columns=["type", "seconds"],
    )
    summary = frame.groupby("type")["seconds"].agg(["sum", "count"])
    summary = summary.rename(columns={"sum": "seconds", "count": "steps"})
    return summary.sort_values("seconds", ascending=False)


# ---------------------------------------------------------------------------
# Sample blocks
# ---------------------------------------------------------------------------


def list_samples() -> list[str]:
    """Names of bundled sample block files (without extension)."""
    if not SAMPLES_DIR.exists():
        return []
    return sorted(p.stem for p in SAMPLES_DIR.glob("*.json"))


def load_blocks(path: Path) -> list[Block]:
    return blocks_from_json(path.read_text(encoding="utf-8"))


def load_blocks_text(text: str) -> list[Block]:
    """Parse pasted/uploaded JSON, accepting a single block object too."""
    payload = json.loads(text)
    if isinstance(payload, dict) and "blocks" not in payload:
        payload = [payload]
    return blocks_from_json(json.dumps(payload))
