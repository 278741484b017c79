"""
ygg-portal Submission Orchestrator

Owns the login/register mode flag and the busy flag, dispatches exactly one
request per validated submit, and classifies the result into either a
session-state update or a notification.

Outcome handling
----------------
* authenticate, token in body      -> merge into session, success toast
* authenticate, no token           -> "登录失败[: reason]"
* authenticate, HTTP 403           -> "登录失败[: reason]"
* register, ``id`` in body         -> switch to login mode, success toast
* register, no ``id`` / error body -> normalized registration error
* anything else                    -> "网络错误:<detail>"

The busy flag is cleared in a ``finally`` block, so it always returns to
idle no matter which branch ran.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Protocol

from .client import IdentityClient
from .errors import FormValidationError, IdentityServiceError
from .messages import (
    LOGIN_SUCCESS,
    LOGIN_SUCCESS_WITH_TOKEN,
    RANDOM_UUID,
    REGISTER_SUCCESS,
    login_failed,
    network_error,
    normalize_register_error,
)
from .schemas import (
    AuthenticateRequest,
    AuthenticateResponse,
    ErrorResponse,
    RegisterRequest,
    RegisterResponse,
    parse_body,
)
from .session import (
    SessionCell,
    SessionState,
    apply_authenticate_success,
    clear_credentials,
    with_login_mode,
)
from .validation import FieldErrors, FormInputs, Mode, build_request

logger = logging.getLogger(__name__)

# ── Notification severities ──────────────────────────────────────────────────
SUCCESS = "success"
ERROR = "error"
INFO = "info"

FORBIDDEN = 403


class Notifier(Protocol):
    """Host-level sink for transient status messages."""

    def notify(self, message: str, severity: str) -> None: ...


class Outcome(str, Enum):
    BUSY = "busy"  # another submission is in flight
    INVALID = "invalid"  # field validation failed, nothing was sent
    SUCCEEDED = "succeeded"
    REJECTED = "rejected"  # well-formed refusal from the identity service
    FAILED = "failed"  # transport / unstructured failure


@dataclass(frozen=True)
class SubmitResult:
    outcome: Outcome
    field_errors: FieldErrors = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.SUCCEEDED


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SubmissionOrchestrator:
    """Idle/Submitting state machine behind the login form."""

    def __init__(
        self,
        client: IdentityClient,
        cell: SessionCell,
        notifier: Notifier,
        clock: Optional[Callable[[], datetime]] = None,
        show_token: bool = True,
    ) -> None:
        self._client = client
        self._cell = cell
        self._notifier = notifier
        self._clock = clock or _utcnow
        self._show_token = show_token
        self._busy = False

    # ── State ─────────────────────────────────────────────────────────────

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def state(self) -> SessionState:
        return self._cell.get()

    @property
    def mode(self) -> Mode:
        return Mode.from_login_flag(self._cell.get().login_mode)

    def toggle_mode(self) -> Mode:
        """Switch between login and register; returns the new mode."""
        state = self._cell.get()
        self._cell.set(with_login_mode(state, not state.login_mode))
        return self.mode

    def logout(self) -> None:
        """Forget the local token and profile.  No request is made."""
        self._cell.set(clear_credentials(self._cell.get()))

    # ── Submission ────────────────────────────────────────────────────────

    def submit(self, inputs: FormInputs) -> SubmitResult:
        """
        Validate *inputs* and, if they pass, run one request for the
        current mode.

        Never raises for network-originated problems: every failure is
        turned into a notification and reported through the returned
        ``SubmitResult``.
        """
        if self._busy:
            logger.info("Submit ignored: a request is already in flight")
            return SubmitResult(Outcome.BUSY)

        mode = self.mode
        try:
            request = build_request(mode, inputs)
        except FormValidationError as exc:
            logger.debug("Form invalid (%s): %s", mode.value, sorted(exc.field_errors))
            return SubmitResult(Outcome.INVALID, exc.field_errors)

        self._busy = True
        try:
            if mode is Mode.AUTHENTICATE:
                outcome = self._authenticate(request)
            else:
                outcome = self._register(request)
        except Exception as exc:
            logger.exception("Unexpected error during %s", mode.value)
            self._notify(network_error(exc), ERROR)
            outcome = Outcome.FAILED
        finally:
            self._busy = False

        logger.info("%s finished: %s", mode.value, outcome.value)
        return SubmitResult(outcome)

    def _authenticate(self, request: AuthenticateRequest) -> Outcome:
        try:
            body = self._client.authenticate(request)
        except IdentityServiceError as exc:
            if exc.status_code == FORBIDDEN:
                error = parse_body(ErrorResponse, exc.body)
                self._notify(login_failed(error.error_message), ERROR)
                return Outcome.REJECTED
            self._notify(network_error(exc), ERROR)
            return Outcome.FAILED

        response = parse_body(AuthenticateResponse, body)
        if not response.access_token:
            self._notify(login_failed(response.error_message), ERROR)
            return Outcome.REJECTED

        self._cell.set(
            apply_authenticate_success(self._cell.get(), response, self._clock())
        )
        if self._show_token:
            self._notify(LOGIN_SUCCESS_WITH_TOKEN.format(token=response.access_token), SUCCESS)
        else:
            self._notify(LOGIN_SUCCESS, SUCCESS)
        return Outcome.SUCCEEDED

    def _register(self, request: RegisterRequest) -> Outcome:
        if request.uuid is None:
            self._notify(RANDOM_UUID, INFO)

        try:
            body = self._client.register(request)
        except IdentityServiceError as exc:
            if exc.has_body:
                error = parse_body(ErrorResponse, exc.body)
                self._notify(normalize_register_error(error.error_message), ERROR)
                return Outcome.REJECTED
            self._notify(network_error(exc), ERROR)
            return Outcome.FAILED

        response = parse_body(RegisterResponse, body)
        if not response.id:
            self._notify(normalize_register_error(response.error_message), ERROR)
            return Outcome.REJECTED

        self._cell.set(with_login_mode(self._cell.get(), True))
        self._notify(REGISTER_SUCCESS.format(id=response.id), SUCCESS)
        return Outcome.SUCCEEDED

    def _notify(self, message: str, severity: str) -> None:
        self._notifier.notify(message, severity)
