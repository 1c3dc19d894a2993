"""Streamlit frontend — Motor Coverage Pro underwriter workstation.

Run with::

    streamlit run frontend/app.py --server.port 8501
"""

from __future__ import annotations

import streamlit as st
from api_client import APIError, UnderwritingAPIClient
from components.dashboard import render_dashboard
from components.policy_form import render_policy_form, reset_policy_form
from components.policy_search import render_policy_search
from styles import inject_global_styles, render_header

VIEWS: dict[str, tuple[str, str]] = {
    "dashboard": ("Motor Coverage Pro", "Underwriter Dashboard"),
    "new-policy": ("New Policy Creation", "Create a new motor vehicle insurance policy"),
    "search-policies": ("Policy Management", "Search, view and manage insurance policies"),
}

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="Motor Coverage Pro",
    page_icon="🚗",
    layout="wide",
    initial_sidebar_state="expanded",
)

inject_global_styles()

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------

if "view" not in st.session_state:
    st.session_state.view = "dashboard"
if "policy_form" not in st.session_state:
    st.session_state.policy_form = None
if "flash" not in st.session_state:
    st.session_state.flash = None

client = UnderwritingAPIClient()


def navigate(view: str) -> None:
    st.session_state.view = view


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.markdown("### 🧭 Navigation")
    for view, (title, _) in VIEWS.items():
        st.button(
            title if view != "dashboard" else "Dashboard",
            key=f"nav_{view}",
            use_container_width=True,
            type="primary" if st.session_state.view == view else "secondary",
            on_click=navigate,
            args=(view,),
        )

    st.divider()
    st.markdown("**API Status**")
    try:
        health = client.health_check()
        st.success(f"Connected — {health.get('policies', '?')} policies on file")
        api_up = True
    except APIError as exc:
        st.error(f"API error: {exc}")
        api_up = False

    if st.session_state.view == "new-policy" and api_up:
        st.divider()
        if st.button("Discard Draft", key="btn_discard"):
            reset_policy_form(client)
            st.rerun()

# ---------------------------------------------------------------------------
# Main area
# ---------------------------------------------------------------------------

title, subtitle = VIEWS[st.session_state.view]
render_header(title, subtitle)

if st.session_state.flash:
    st.success(st.session_state.flash)
    st.session_state.flash = None

if not api_up:
    st.markdown(
        """
        <div class="card" style="text-align:center; padding:3rem;">
            <h3 style="color:#7f8c8d;">Backend unavailable</h3>
            <p>Start it with <code>python -m motor_cover.main</code> and reload this page.</p>
        </div>
        """,
        unsafe_allow_html=True,
    )
    st.stop()

try:
    if st.session_state.view == "new-policy":
        render_policy_form(client, client.get_catalog(), navigate)
    elif st.session_state.view == "search-policies":
        render_policy_search(client)
    else:
        render_dashboard(client.get_dashboard(), navigate)
except APIError as exc:
    st.error(f"API returned an error: {exc}")
