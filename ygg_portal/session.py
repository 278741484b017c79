"""
Shared session state and the pure transforms that move it forward.

The host owns a single ``SessionState`` value behind a read/replace cell;
the orchestrator reads it, computes a successor with one of the transforms
below, and replaces it wholesale.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from pydantic import BaseModel, ConfigDict

from .schemas import AuthenticateResponse


class SessionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    login_mode: bool = True
    access_token: Optional[str] = None
    token_valid: bool = False
    login_time: Optional[datetime] = None
    profile_name: Optional[str] = None
    profile_id: Optional[str] = None


class SessionCell(Protocol):
    """Read/replace access to the host's current ``SessionState``."""

    def get(self) -> SessionState: ...

    def set(self, state: SessionState) -> None: ...


class MemorySessionCell:
    """Plain in-process cell, used outside Streamlit (scripts, tests)."""

    def __init__(self, state: Optional[SessionState] = None) -> None:
        self._state = state or SessionState()

    def get(self) -> SessionState:
        return self._state

    def set(self, state: SessionState) -> None:
        self._state = state


# ── Transforms ───────────────────────────────────────────────────────────────


def apply_authenticate_success(
    previous: SessionState,
    response: AuthenticateResponse,
    now: datetime,
) -> SessionState:
    """
    Merge a successful ``/authenticate`` response into *previous*.

    Profile fields are overwritten even when the response carries no
    ``selectedProfile``; everything else (the mode flag) is kept.
    """
    profile = response.selected_profile
    return previous.model_copy(
        update={
            "access_token": response.access_token,
            "token_valid": True,
            "login_time": now,
            "profile_name": profile.name if profile else None,
            "profile_id": profile.id if profile else None,
        }
    )


def with_login_mode(previous: SessionState, login_mode: bool) -> SessionState:
    return previous.model_copy(update={"login_mode": login_mode})


def clear_credentials(previous: SessionState) -> SessionState:
    """Drop the token and profile, keeping the current mode."""
    return SessionState(login_mode=previous.login_mode)
