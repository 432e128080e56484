"""Environment-variable-based configuration."""

from __future__ import annotations

import os
from pathlib import Path

from workout_timeline.models.enums import (
    DEFAULT_ALLOWED_DRIFT_MS,
    DEFAULT_RESYNC_EVERY_MS,
)

# Repository root for a source checkout: src/workout_timeline/config.py -> ../..
PROJECT_ROOT: Path = Path(__file__).resolve().parents[2]

RESYNC_EVERY_MS: int = int(
    os.environ.get("TIMELINE_RESYNC_EVERY_MS", str(DEFAULT_RESYNC_EVERY_MS))
)
ALLOWED_DRIFT_MS: int = int(
    os.environ.get("TIMELINE_ALLOWED_DRIFT_MS", str(DEFAULT_ALLOWED_DRIFT_MS))
)
LOG_LEVEL: str = os.environ.get("TIMELINE_LOG_LEVEL", "INFO").upper()
BLOCKS_PATH: Path = Path(
    os.environ.get(
        "TIMELINE_BLOCKS_PATH",
        str(PROJECT_ROOT / "streamlit_app" / "samples" / "full_session.json"),
    )
).expanduser()
