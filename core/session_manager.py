import streamlit as st

from core.logging_utils import configure_logging
from services.ai_tasks import AICallScope
from services.hospital_state import HospitalState


def init_session_state():
    """Ensure the per-session store and AI call scope exist."""
    if st.session_state.get("hospital") is None:
        configure_logging()
        st.session_state.hospital = HospitalState.create()
    scope = st.session_state.get("ai_calls")
    if scope is None or scope.closed:
        st.session_state.ai_calls = AICallScope()


def get_state() -> HospitalState:
    init_session_state()
    return st.session_state.hospital


def get_ai_calls() -> AICallScope:
    init_session_state()
    return st.session_state.ai_calls


def leave_view(*keys: str):
    """Drop AI work started by a view the user navigated away from."""
    scope = st.session_state.get("ai_calls")
    if scope is None:
        return
    for key in keys:
        scope.discard(key)


def clear_session(session=None):
    """Close pending AI calls and throw away the session's store."""
    session = st.session_state if session is None else session
    session.pop("insights_requested", None)
    scope = session.pop("ai_calls", None)
    if scope is not None:
        scope.close()
    state = session.pop("hospital", None)
    if state is not None:
        state.dispose()
