"""Parse authored block JSON into Block models.

Accepts the camelCase shape produced by the authoring surface::

    {
      "type": "custom_sequence",
      "name": "Upper Body",
      "pattern": "circuit",          # may also live inside params
      "mode": "time",                # may also live inside params
      "params": {"setsPerExercise": 3, "workSec": 40, "restSec": 20},
      "exercises": [{"exerciseId": 12, "orderIndex": 0, ...}]
    }

Unknown block types are kept (as BlockType.UNSUPPORTED) so the compiler can
report them; malformed values raise InvalidBlockError.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any

from workout_timeline.exceptions import InvalidBlockError
from workout_timeline.models.block import Block, BlockExercise, BlockParams, PostCardio
from workout_timeline.models.enums import BlockType, Mode, Pattern

BLOCK_TYPE_KEYS: dict[str, BlockType] = {
    "custom_sequence": BlockType.CUSTOM_SEQUENCE,
    "transition": BlockType.TRANSITION,
}

PATTERN_KEYS: dict[str, Pattern] = {
    "straight_sets": Pattern.STRAIGHT_SETS,
    "superset": Pattern.SUPERSET,
    "circuit": Pattern.CIRCUIT,
    "custom": Pattern.CUSTOM,
}

MODE_KEYS: dict[str, Mode] = {
    "time": Mode.TIME,
    "reps": Mode.REPS,
}


def block_from_dict(data: Mapping[str, Any]) -> Block:
    """Build a Block (with its exercises) from a JSON-style dict."""
    _require_mapping(data, "block")
    params_data = data.get("params") or {}
    _require_mapping(params_data, "params")
    type_name = str(data.get("type") or params_data.get("type") or "")
    pattern_name = data.get("pattern") or params_data.get("pattern") or "circuit"
    mode_name = data.get("mode") or params_data.get("mode")

    return Block(
        block_type=BLOCK_TYPE_KEYS.get(type_name, BlockType.UNSUPPORTED),
        name=str(data.get("name") or ""),
        description=str(data.get("description") or ""),
        pattern=_lookup(PATTERN_KEYS, pattern_name, "pattern"),
        mode=_lookup(MODE_KEYS, mode_name, "mode") if mode_name else None,
        params=params_from_dict(params_data),
        exercises=tuple(
            exercise_from_dict(item) for item in data.get("exercises") or ()
        ),
        type_name=type_name,
    )


def blocks_from_json(text: str) -> list[Block]:
    """Parse a JSON document holding a list of blocks (or ``{"blocks": [...]}``)."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidBlockError(f"Blocks document is not valid JSON: {exc}") from exc
    if isinstance(payload, Mapping):
        payload = payload.get("blocks", [])
    if not isinstance(payload, list):
        raise InvalidBlockError("Expected a list of blocks")
    return [block_from_dict(item) for item in payload]


def params_from_dict(data: Mapping[str, Any]) -> BlockParams:
    _require_mapping(data, "params")
    post_cardio = data.get("postCardio")
    if post_cardio:
        _require_mapping(post_cardio, "postCardio")
    defaults = BlockParams()
    return BlockParams(
        sets_per_exercise=_int(data, "setsPerExercise", defaults.sets_per_exercise),
        work_sec=_optional_seconds(data, "workSec"),
        rest_sec=_seconds(data, "restSec", defaults.rest_sec),
        round_rest_sec=_seconds(data, "roundRestSec", defaults.round_rest_sec),
        transition_sec=_seconds(data, "transitionSec", defaults.transition_sec),
        await_ready_before_start=bool(data.get("awaitReadyBeforeStart", False)),
        target_reps=_optional_str(data, "targetReps"),
        post_cardio=PostCardio(
            exercise=str(post_cardio.get("exercise", "")),
            duration_sec=_seconds(post_cardio, "durationSec", 0),
        ) if post_cardio else None,
        duration_sec=_seconds(data, "durationSec", defaults.duration_sec),
    )


def exercise_from_dict(data: Mapping[str, Any]) -> BlockExercise:
    _require_mapping(data, "exercise")
    exercise_id = _optional_int(data, "exerciseId")
    if exercise_id is None:
        raise InvalidBlockError("Block exercise is missing exerciseId", field="exerciseId")
    return BlockExercise(
        exercise_id=exercise_id,
        order_index=_int(data, "orderIndex", 0),
        exercise_name=str(data.get("exerciseName") or ""),
        primary_muscle_group=data.get("primaryMuscleGroup"),
        equipment_primary=data.get("equipmentPrimary"),
        equipment_secondary=tuple(data.get("equipmentSecondary") or ()),
        coaching_bullet_points=data.get("coachingBulletPoints"),
        video_url=data.get("videoUrl"),
        image_url=data.get("imageUrl"),
        work_sec=_optional_seconds(data, "workSec"),
        rest_sec=_optional_seconds(data, "restSec"),
        target_reps=_optional_str(data, "targetReps"),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _require_mapping(value: Any, field: str) -> None:
    if not isinstance(value, Mapping):
        raise InvalidBlockError(
            f"{field} must be a JSON object, got {type(value).__name__}", field=field,
        )


def _lookup(keys: Mapping[str, Any], name: str, field: str):
    try:
        return keys[name]
    except (KeyError, TypeError):
        raise InvalidBlockError(
            f"Unknown {field} {name!r}; expected one of {sorted(keys)}", field=field,
        ) from None


def _optional_seconds(data: Mapping[str, Any], key: str) -> float | None:
    """A duration in seconds; whole values come back as int, fractions are kept."""
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidBlockError(f"{key} must be a number, got {value!r}", field=key)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidBlockError(
            f"{key} must be a number, got {value!r}", field=key,
        ) from None
    if not math.isfinite(number):
        raise InvalidBlockError(f"{key} must be finite, got {value!r}", field=key)
    return int(number) if number.is_integer() else number


def _seconds(data: Mapping[str, Any], key: str, default: float) -> float:
    value = _optional_seconds(data, key)
    return default if value is None else value


def _optional_int(data: Mapping[str, Any], key: str) -> int | None:
    number = _optional_seconds(data, key)
    if number is not None and not isinstance(number, int):
        raise InvalidBlockError(
            f"{key} must be a whole number, got {data[key]!r}", field=key,
        )
    return number


def _int(data: Mapping[str, Any], key: str, default: int) -> int:
    value = _optional_int(data, key)
    return default if value is None else value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None or value == "":
        return None
    return str(value)
