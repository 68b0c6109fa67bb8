from typing import MutableMapping

from notenrechner.history import HistoryLedger

# ------------------------
# Session state helpers (UI-side)
# ------------------------
# `state` is st.session_state in the app; any mutable mapping works.

LEDGER_KEY = "ledger"
CONFIRM_CLEAR_KEY = "confirm_clear"


def get_ledger(state: MutableMapping) -> HistoryLedger:
    if LEDGER_KEY not in state:
        state[LEDGER_KEY] = HistoryLedger()
    return state[LEDGER_KEY]


def remove_record(state: MutableMapping, record_id: str) -> None:
    ledger = get_ledger(state)
    ledger.remove(record_id)
    if len(ledger) == 0:
        state[CONFIRM_CLEAR_KEY] = False


def ask_clear(state: MutableMapping) -> None:
    state[CONFIRM_CLEAR_KEY] = True


def confirm_clear(state: MutableMapping) -> None:
    get_ledger(state).clear()
    state[CONFIRM_CLEAR_KEY] = False


def cancel_clear(state: MutableMapping) -> None:
    state[CONFIRM_CLEAR_KEY] = False


def is_clear_pending(state: MutableMapping) -> bool:
    return bool(state.get(CONFIRM_CLEAR_KEY)) and len(get_ledger(state)) > 0
