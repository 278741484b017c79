"""
ygg-portal -- Main Streamlit Application

Entry point for the login / register page.  Run with::

    streamlit run ygg_portal/streamlit_app.py
"""

import logging
import os
import sys

# Ensure the project root is on sys.path so absolute imports like
# ``from ygg_portal.host import ...`` work when Streamlit runs this file
# as __main__.
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st

from ygg_portal.config import get_settings

settings = get_settings()

# ── Page config (must be the first Streamlit call) ────────────────────────────
st.set_page_config(page_title=settings.PAGE_TITLE, layout="centered")

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

from ygg_portal.components.login_form import render_login_page
from ygg_portal.host import get_notifier, get_orchestrator

# ── Notifications queued by the previous run ─────────────────────────────────
get_notifier().flush()

# ── Login / register form ────────────────────────────────────────────────────
render_login_page()

# ── Current session ──────────────────────────────────────────────────────────
orchestrator = get_orchestrator()
state = orchestrator.state
if state.token_valid:
    st.markdown("---")
    st.markdown(f"**{state.profile_name or '(no profile)'}**")
    if state.profile_id:
        st.caption(f"uuid: {state.profile_id}")
    if state.login_time:
        st.caption(f"login time: {state.login_time:%Y-%m-%d %H:%M:%S} UTC")
    if st.button("Logout", key="btn_logout"):
        orchestrator.logout()
        st.rerun()
