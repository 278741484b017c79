"""
ygg-portal Streamlit Host Bindings

Adapts ``st.session_state`` to the session cell and notification sink that
the orchestrator expects, and keeps one orchestrator per browser session.
"""

import logging
from typing import MutableMapping, Optional

import streamlit as st

from .client import IdentityClient
from .config import get_settings
from .orchestrator import SubmissionOrchestrator
from .session import SessionState

logger = logging.getLogger(__name__)

SESSION_KEY = "ygg_session"
NOTIFICATIONS_KEY = "pending_notifications"
ORCHESTRATOR_KEY = "submission_orchestrator"

_TOAST_ICONS = {
    "success": "✅",
    "error": "❌",
    "info": "ℹ️",
}


class StreamlitSessionCell:
    """``SessionState`` stored under a single ``st.session_state`` key."""

    def __init__(
        self,
        store: Optional[MutableMapping] = None,
        key: str = SESSION_KEY,
    ) -> None:
        self._store = st.session_state if store is None else store
        self._key = key

    def get(self) -> SessionState:
        state = self._store.get(self._key)
        if state is None:
            state = SessionState()
            self._store[self._key] = state
        return state

    def set(self, state: SessionState) -> None:
        self._store[self._key] = state


class StreamlitNotifier:
    """
    Queue notifications in session state and show them as toasts.

    The form reruns the script right after a submission, so messages are
    held until ``flush()`` is called at the top of the next run.
    """

    def __init__(
        self,
        store: Optional[MutableMapping] = None,
        key: str = NOTIFICATIONS_KEY,
    ) -> None:
        self._store = st.session_state if store is None else store
        self._key = key

    def notify(self, message: str, severity: str) -> None:
        pending = self._store.get(self._key) or []
        pending.append({"message": message, "severity": severity})
        self._store[self._key] = pending

    def flush(self) -> int:
        """Render and clear all queued notifications; returns how many."""
        pending = self._store.get(self._key) or []
        self._store[self._key] = []
        for item in pending:
            st.toast(item["message"], icon=_TOAST_ICONS.get(item["severity"]))
        return len(pending)


def get_notifier() -> StreamlitNotifier:
    return StreamlitNotifier()


def get_orchestrator() -> SubmissionOrchestrator:
    """
    Return the per-session ``SubmissionOrchestrator`` singleton.

    Stored in ``st.session_state`` so the busy flag survives reruns.
    """
    if ORCHESTRATOR_KEY not in st.session_state:
        settings = get_settings()
        logger.info("Creating orchestrator for %s", settings.auth_base_url)
        st.session_state[ORCHESTRATOR_KEY] = SubmissionOrchestrator(
            client=IdentityClient.from_settings(settings),
            cell=StreamlitSessionCell(),
            notifier=get_notifier(),
            show_token=settings.SHOW_TOKEN_IN_NOTIFICATION,
        )
    return st.session_state[ORCHESTRATOR_KEY]
