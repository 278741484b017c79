"""Tests for session state transforms."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from ygg_portal.schemas import AuthenticateResponse
from ygg_portal.session import (
    MemorySessionCell,
    SessionState,
    apply_authenticate_success,
    clear_credentials,
    with_login_mode,
)

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


class TestApplyAuthenticateSuccess:
    def test_merges_token_and_profile(self):
        response = AuthenticateResponse.model_validate({
            "accessToken": "abc123",
            "selectedProfile": {"name": "Steve", "id": "11111111-2222-3333-4444-555555555555"},
        })
        state = apply_authenticate_success(SessionState(), response, NOW)
        assert state.access_token == "abc123"
        assert state.token_valid is True
        assert state.login_time == NOW
        assert state.profile_name == "Steve"
        assert state.profile_id == "11111111-2222-3333-4444-555555555555"

    def test_missing_profile_clears_previous_profile(self):
        previous = SessionState(profile_name="Alex", profile_id="old-id")
        response = AuthenticateResponse.model_validate({"accessToken": "t"})
        state = apply_authenticate_success(previous, response, NOW)
        assert state.profile_name is None
        assert state.profile_id is None

    def test_keeps_mode_and_leaves_previous_untouched(self):
        previous = SessionState(login_mode=True)
        response = AuthenticateResponse.model_validate({"accessToken": "t"})
        state = apply_authenticate_success(previous, response, NOW)
        assert state.login_mode is True
        assert previous.access_token is None
        assert state is not previous


class TestModeAndLogout:
    def test_toggle_twice_is_identity(self):
        original = SessionState(access_token="t", token_valid=True)
        assert with_login_mode(with_login_mode(original, False), True) == original

    def test_clear_credentials_keeps_mode(self):
        state = SessionState(login_mode=False, access_token="t", token_valid=True, profile_name="Steve")
        assert clear_credentials(state) == SessionState(login_mode=False)

    def test_state_is_immutable(self):
        with pytest.raises(ValidationError):
            SessionState().access_token = "t"


class TestMemorySessionCell:
    def test_starts_in_login_mode(self):
        assert MemorySessionCell().get() == SessionState(login_mode=True)

    def test_set_replaces_value(self):
        cell = MemorySessionCell()
        new_state = SessionState(login_mode=False)
        cell.set(new_state)
        assert cell.get() is new_state
