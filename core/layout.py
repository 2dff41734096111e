import streamlit as st

from core.config import settings
from core.session_manager import clear_session, get_ai_calls, leave_view


# -----------------------------
# Sidebar helpers
# -----------------------------
def hide_default_sidebar_nav():
    """Hide Streamlit's default multi-page navigation for a cleaner custom menu."""
    st.markdown(
        """
        <style>
        [data-testid="stSidebarNav"] { display: none; }
        </style>
        """,
        unsafe_allow_html=True,
    )


_MENU = [
    ("Dashboard", "app.py", "insights"),
    ("Patient Mgmt", "pages/patients.py", None),
    ("Pharmacy & Ops", "pages/pharmacy.py", "forecast"),
    ("Finance & GL", "pages/finance.py", "invoice"),
]


def render_sidebar(current: str):
    """Main menu. Leaving a view drops the AI results it was waiting on."""
    hide_default_sidebar_nav()
    with st.sidebar:
        st.markdown("### Medius-AI")
        st.caption("Hospital ERP")
        for label, target, _ in _MENU:
            if target == current:
                st.button(label, use_container_width=True, disabled=True, key=f"nav_{target}")
                continue
            if st.button(label, use_container_width=True, key=f"nav_{target}"):
                current_key = next((k for _, t, k in _MENU if t == current), None)
                if current_key:
                    leave_view(current_key)
                st.switch_page(target)
        st.divider()
        if st.button("Reset session", use_container_width=True, key="nav_reset"):
            # Cancels pending AI calls and reloads the demo data
            clear_session()
            st.rerun()


def show_ai_progress(key: str, label: str):
    """While an AI call for key is running, show a spinner and rerun when it lands."""
    scope = get_ai_calls()
    if not scope.is_pending(key):
        return
    with st.spinner(label):
        scope.wait(key, timeout=settings.ai_timeout)
    st.rerun()
