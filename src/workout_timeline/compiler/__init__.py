"""Timeline compiler — expands blocks into absolute-timestamped timelines."""

from workout_timeline.compiler.compiler import (
    CompileOptions,
    TimelineCompiler,
    compile_block,
    compile_workout,
)
from workout_timeline.compiler.expansion import ExpandedBlock, expand

__all__ = [
    "CompileOptions",
    "ExpandedBlock",
    "TimelineCompiler",
    "compile_block",
    "compile_workout",
    "expand",
]
