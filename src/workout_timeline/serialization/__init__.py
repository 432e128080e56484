"""Serialization module — block JSON in, timeline JSON out."""

from workout_timeline.serialization.blocks import block_from_dict, blocks_from_json
from workout_timeline.serialization.timeline_json import (
    to_timeline_json,
    to_timeline_json_string,
)

__all__ = [
    "block_from_dict",
    "blocks_from_json",
    "to_timeline_json",
    "to_timeline_json_string",
]
