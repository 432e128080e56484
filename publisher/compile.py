"""Publish-time compile job — turns an authored blocks file into a timeline.

Usage:
    python -m publisher.compile blocks.json --name "Full Session"
    python -m publisher.compile blocks.json --name "Legs" --out legs.json --strict
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from workout_timeline import config
from workout_timeline.compiler import TimelineCompiler
from workout_timeline.exceptions import InvalidBlockError
from workout_timeline.serialization import blocks_from_json, to_timeline_json_string
from workout_timeline.validation import validate

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def compile_job(blocks_path: Path, workout_name: str, out_path: Path | None, strict: bool) -> int:
    """Compile, validate and write one workout. Returns a process exit code."""
    logger.info("Compiling %s as %r", blocks_path, workout_name)

    try:
        blocks = blocks_from_json(blocks_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.error("Blocks file not found at %s", blocks_path)
        return 2
    except InvalidBlockError as exc:
        logger.error("Invalid block definition: %s", exc)
        return 2

    timeline = TimelineCompiler().compile_workout(blocks, workout_name)

    result = validate(timeline)
    for error in result.errors:
        logger.warning("Timeline check: %s", error)
    if strict and not result.valid:
        logger.error("Refusing to publish %r: %d errors", workout_name, len(result.errors))
        return 1

    payload = to_timeline_json_string(timeline)
    if out_path is None:
        sys.stdout.write(payload + "\n")
    else:
        out_path.write_text(payload, encoding="utf-8")
        logger.info(
            "Wrote %d steps (%ds) to %s",
            len(timeline.execution_timeline),
            timeline.workout_header.total_duration_sec,
            out_path,
        )
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Compile workout blocks into an execution timeline")
    parser.add_argument("blocks", type=Path, nargs="?", default=config.BLOCKS_PATH,
                        help="JSON file with a list of blocks")
    parser.add_argument("--name", default="Workout", help="Workout name for the header")
    parser.add_argument("--out", type=Path, default=None, help="Write JSON here instead of stdout")
    parser.add_argument("--strict", action="store_true",
                        help="Exit non-zero if the timeline fails validation")
    args = parser.parse_args()

    sys.exit(compile_job(args.blocks, args.name, args.out, args.strict))


if __name__ == "__main__":
    main()
