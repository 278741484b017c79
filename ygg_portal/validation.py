"""
ygg-portal Form Validator

Turns the raw login / register form values into one of the two request
variants, or into a per-field error map for inline display.  Validation is
pure: it never touches session state and is re-run on every submit.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Union

from pydantic import ValidationError

from .errors import FormValidationError
from .messages import FIELD_ERRORS
from .schemas import AuthenticateRequest, RegisterRequest

FieldErrors = Dict[str, str]
IdentityRequest = Union[AuthenticateRequest, RegisterRequest]

# Request field (by alias or by name) -> form field
_FORM_FIELDS = {
    "username": "identifier",
    "password": "secret",
    "profileName": "display_name",
    "profile_name": "display_name",
    "uuid": "requested_id",
}


class Mode(str, Enum):
    AUTHENTICATE = "authenticate"
    REGISTER = "register"

    @classmethod
    def from_login_flag(cls, login_mode: bool) -> "Mode":
        return cls.AUTHENTICATE if login_mode else cls.REGISTER


@dataclass(frozen=True)
class FormInputs:
    """Raw field values for a single submission attempt."""

    identifier: str = ""
    secret: str = ""
    display_name: str = ""
    requested_id: str = ""


def build_request(mode: Mode, inputs: FormInputs) -> IdentityRequest:
    """
    Build the request variant for *mode* from *inputs*.

    In authenticate mode ``display_name`` and ``requested_id`` are ignored
    entirely, even if they still hold stale values from register mode.

    Raises
    ------
    FormValidationError
        With ``field_errors`` keyed by form field name.
    """
    username = inputs.identifier.strip()
    try:
        if mode is Mode.AUTHENTICATE:
            return AuthenticateRequest(username=username, password=inputs.secret)
        return RegisterRequest(
            username=username,
            password=inputs.secret,
            profile_name=inputs.display_name,
            uuid=inputs.requested_id or None,
        )
    except ValidationError as exc:
        raise FormValidationError(_to_field_errors(exc)) from exc


def validate_form(mode: Mode, inputs: FormInputs) -> FieldErrors:
    """Return the field errors for *inputs*; an empty dict means valid."""
    try:
        build_request(mode, inputs)
    except FormValidationError as exc:
        return exc.field_errors
    return {}


def _to_field_errors(exc: ValidationError) -> FieldErrors:
    errors: FieldErrors = {}
    for error in exc.errors():
        loc = error.get("loc") or ("",)
        field = _FORM_FIELDS.get(str(loc[0]), str(loc[0]))
        errors.setdefault(field, FIELD_ERRORS.get(field, error.get("msg", "")))
    return errors
