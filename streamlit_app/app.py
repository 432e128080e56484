"""Workout Timeline Preview — Streamlit dashboard.

Run with:
    streamlit run streamlit_app/app.py

Loads authored blocks (bundled sample, upload or paste), compiles them and
shows the resulting timeline the way the player will walk it.
"""

from __future__ import annotations

import logging

import streamlit as st

from workout_timeline import config
from workout_timeline.compiler import CompileOptions, TimelineCompiler
from workout_timeline.exceptions import InvalidBlockError
from workout_timeline.models.enums import StepType
from workout_timeline.serialization import to_timeline_json_string
from workout_timeline.validation import validate

from helpers import (
    SAMPLES_DIR,
    STEP_COLORS,
    STEP_LABELS,
    describe_step,
    format_clock,
    format_duration_ms,
    list_samples,
    load_blocks,
    load_blocks_text,
    time_by_step_type,
    timeline_to_frame,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Workout Timeline Preview",
    page_icon="⏱️",
    layout="wide",
)


@st.cache_resource
def get_compiler() -> TimelineCompiler:
    return TimelineCompiler()


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def _render_steps(timeline) -> None:
    """Render steps as color-coded bars with workout-clock times."""
    pre_ms = timeline.workout_header.pre_workout_duration_ms
    for step in timeline.execution_timeline:
        color = STEP_COLORS.get(step.step_type, "#CCCCCC")
        clock = "Ready..." if step.pre_workout else format_clock(step.at_ms, pre_ms)

        parts = [f"<strong>{step.step}. {STEP_LABELS[step.step_type]}</strong>", clock]
        duration = format_duration_ms(step.duration_ms)
        if step.step_type == StepType.AWAIT_READY:
            parts.append("waits for ready")
        elif duration != "--":
            parts.append(duration)
        if step.set is not None:
            parts.append(f"set {step.set}")
        parts.append(describe_step(step))

        detail = ""
        if step.coach_prompt:
            detail = f'<br><small style="color:#666;">🎙️ {step.coach_prompt}</small>'
        elif step.exercise is not None and step.exercise.cues:
            detail = f'<br><small style="color:#666;">{" · ".join(step.exercise.cues)}</small>'

        st.markdown(
            f'<div style="background:{color};padding:6px 12px;'
            f'border-radius:4px;margin:2px 0;width:100%;">'
            f'{" | ".join(parts)}{detail}</div>',
            unsafe_allow_html=True,
        )


# ---------------------------------------------------------------------------
# Sidebar input
# ---------------------------------------------------------------------------

st.sidebar.title("Blocks")

source = st.sidebar.radio("Source", ["Sample", "Upload", "Paste"])
workout_name = st.sidebar.text_input("Workout name", value="Full Session")
single_block = st.sidebar.checkbox("Compile first block only")
include_intro = st.sidebar.checkbox("Include intro", disabled=not single_block)

blocks = None
try:
    if source == "Sample":
        samples = list_samples()
        if samples:
            choice = st.sidebar.selectbox("Sample", samples)
            blocks = load_blocks(SAMPLES_DIR / f"{choice}.json")
        elif config.BLOCKS_PATH.exists():
            blocks = load_blocks(config.BLOCKS_PATH)
    elif source == "Upload":
        uploaded = st.sidebar.file_uploader("Blocks JSON", type="json")
        if uploaded is not None:
            blocks = load_blocks_text(uploaded.getvalue().decode("utf-8"))
    else:
        pasted = st.sidebar.text_area("Blocks JSON", height=300)
        if pasted.strip():
            blocks = load_blocks_text(pasted)
except (InvalidBlockError, ValueError) as e:
    st.sidebar.error(f"Could not read blocks: {e}")
    logger.warning("Rejected block input: %s", e)

# ---------------------------------------------------------------------------
# Main content
# ---------------------------------------------------------------------------

st.title("Workout Timeline Preview")
st.caption("Blocks compiled into the absolute-timestamped steps the player follows")

if not blocks:
    st.info("Choose a sample, upload or paste blocks to compile a timeline.")
    st.stop()

compiler = get_compiler()
if single_block:
    timeline = compiler.compile_block(
        blocks[0], CompileOptions(workout_name=workout_name, include_intro=include_intro),
    )
else:
    timeline = compiler.compile_workout(blocks, workout_name)

header = timeline.workout_header
c1, c2, c3, c4 = st.columns(4)
c1.metric("Total", format_duration_ms(header.total_duration_sec * 1000))
c2.metric("Workout clock", format_duration_ms(int(timeline.workout_duration_sec * 1000)))
c3.metric("Steps", len(timeline.execution_timeline))
c4.metric("Structure", header.structure)

result = validate(timeline)
if result.valid:
    st.success("Timeline passes all structural checks")
else:
    st.error(f"{len(result.errors)} structural problem(s)")
    for error in result.errors:
        st.markdown(f"- {error}")

tab_steps, tab_table, tab_json = st.tabs(["Steps", "Table", "JSON"])

with tab_steps:
    _render_steps(timeline)

with tab_table:
    st.dataframe(timeline_to_frame(timeline), hide_index=True, use_container_width=True)
    st.subheader("Time by step type")
    st.dataframe(time_by_step_type(timeline), use_container_width=True)

with tab_json:
    payload = to_timeline_json_string(timeline)
    st.download_button(
        "Download timeline (.json)",
        data=payload,
        file_name=f"{header.name.replace(' ', '_') or 'timeline'}.json",
        mime="application/json",
    )
    st.code(payload, language="json")
