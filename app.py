import logging

import numpy as np
import streamlit as st

from notenrechner.grade_logic import IHK_MAX_POINTS, ScoringMode, calculate, percentage_summary
from notenrechner.history import make_record
from notenrechner.io_csv import describe_record, history_to_csv
from notenrechner.session import (
    CONFIRM_CLEAR_KEY,
    ask_clear,
    cancel_clear,
    confirm_clear,
    get_ledger,
    is_clear_pending,
    remove_record,
)
from notenrechner.validation import InputValidationError, validate_input

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("notenrechner.app")

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title="Notenrechner | IHK & Custom Grade Calculator",
    page_icon="📝",
    layout="centered",
)

st.title("📝 Notenrechner")
st.write(
    "Convert exam points into a German grade (1.0 best, 6.0 worst). "
    "Use the official IHK key for 100-point exams, or a linear key for any maximum."
)

MODE_OPTIONS = {
    "IHK": ScoringMode.IHK,
    "Custom maximum": ScoringMode.CUSTOM,
}

# The ledger lives only as long as this browser session
ledger = get_ledger(st.session_state)


def _reset_result():
    st.session_state.pop("result", None)
    st.session_state.pop("error", None)


def _remove(record_id: str):
    remove_record(st.session_state, record_id)


def _ask_clear():
    ask_clear(st.session_state)


def _clear():
    confirm_clear(st.session_state)


def _cancel_clear():
    cancel_clear(st.session_state)


# ------------------------
# Input form
# ------------------------

mode_label = st.radio(
    "Scoring mode",
    list(MODE_OPTIONS.keys()),
    horizontal=True,
    on_change=_reset_result,
)
mode = MODE_OPTIONS[mode_label]

with st.form("grade_input_form"):
    points = st.number_input(
        "Points",
        min_value=0,
        value=None,
        step=1,
        format="%d",
    )
    max_points = st.number_input(
        "Maximum points" if mode is ScoringMode.CUSTOM else f"Maximum points (optional, default {IHK_MAX_POINTS})",
        min_value=1,
        value=None,
        step=1,
        format="%d",
        key=f"max_points_{mode.name}",
    )

    submitted = st.form_submit_button("Calculate", type="primary")

if submitted:
    points = None if points is None else int(points)
    max_points = None if max_points is None else int(max_points)
    try:
        validate_input(mode, points, max_points)
    except InputValidationError as e:
        logger.warning("rejected_input mode=%s points=%s max=%s err=%s", mode.value, points, max_points, e)
        st.session_state["error"] = str(e)
        st.session_state.pop("result", None)
    else:
        result = calculate(mode, points, max_points)
        ledger.append(make_record(mode, points, max_points, result))
        st.session_state["result"] = result
        st.session_state["summary"] = percentage_summary(points, max_points)
        st.session_state.pop("error", None)


# ------------------------
# Result
# ------------------------

if "error" in st.session_state:
    st.error(st.session_state["error"])
elif "result" in st.session_state:
    result = st.session_state["result"]
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Grade", f"{result.rounded:.1f}" if not np.isnan(result.value) else "N/A")
    with c2:
        st.metric("Assessment", result.label.title)
    with c3:
        st.metric("Score", st.session_state["summary"])


# ------------------------
# History
# ------------------------

if len(ledger) > 0:
    st.markdown("---")
    head, clear_col = st.columns([4, 1])
    with head:
        st.subheader("History")
    with clear_col:
        st.button("Clear", key="clear_history", on_click=_ask_clear)

    if is_clear_pending(st.session_state):
        st.warning("Clear the whole history?")
        yes, no = st.columns(2)
        with yes:
            st.button("Yes, clear", key="confirm_clear_yes", on_click=_clear)
        with no:
            st.button("Cancel", key="confirm_clear_no", on_click=_cancel_clear)

    for record in ledger.newest_first():
        row, remove_col = st.columns([5, 1])
        with row:
            st.markdown(describe_record(record))
        with remove_col:
            st.button("✕", key=f"remove_{record.id}", on_click=_remove, args=(record.id,))

    st.download_button(
        "Download history (CSV)",
        data=history_to_csv(ledger.all()),
        file_name="notenrechner_history.csv",
        mime="text/csv",
    )
else:
    st.session_state[CONFIRM_CLEAR_KEY] = False
    st.info("Enter your points and click **Calculate** to get started.")
