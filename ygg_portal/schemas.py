"""
Pydantic models for identity-service request / response bodies.

The two request variants carry their own validation rules; the form validator
builds one or the other depending on the current mode.
"""

from __future__ import annotations

import logging
import re
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

# HTML ``<input type=email>`` grammar
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*"
)
PROFILE_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")
UUID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[1-5][0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}"
)

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 128
PROFILE_NAME_MIN_LENGTH = 2
PROFILE_NAME_MAX_LENGTH = 16


# ---- Requests ----

class _Credentials(BaseModel):
    """Fields shared by both request variants."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    username: str
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH)

    @field_validator("username")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.fullmatch(value):
            raise ValueError("not a valid email address")
        return value

    def to_payload(self) -> dict:
        """JSON body sent to the identity service."""
        return self.model_dump(by_alias=True, exclude_none=True)


class AuthenticateRequest(_Credentials):
    """Body of ``POST /authenticate``; never carries profile fields."""


class RegisterRequest(_Credentials):
    """Body of ``POST /register``; ``uuid`` is only sent when requested."""

    profile_name: str = Field(
        ...,
        alias="profileName",
        min_length=PROFILE_NAME_MIN_LENGTH,
        max_length=PROFILE_NAME_MAX_LENGTH,
    )
    uuid: Optional[str] = Field(
        default=None,
        description="Requested profile id; the server picks a random one when omitted",
    )

    @field_validator("profile_name")
    @classmethod
    def check_profile_name(cls, value: str) -> str:
        if not PROFILE_NAME_PATTERN.fullmatch(value):
            raise ValueError("only letters, digits and underscore are allowed")
        return value

    @field_validator("uuid")
    @classmethod
    def check_uuid(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not UUID_PATTERN.fullmatch(value):
            raise ValueError("not a canonical UUID")
        return value


# ---- Responses ----

# Servers are not consistent about ids: numbers are read as strings.
_RESPONSE_CONFIG = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)


class SelectedProfile(BaseModel):
    model_config = _RESPONSE_CONFIG

    id: Optional[str] = None
    name: Optional[str] = None


class AuthenticateResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    access_token: Optional[str] = Field(default=None, alias="accessToken")
    selected_profile: Optional[SelectedProfile] = Field(default=None, alias="selectedProfile")
    error_message: Optional[str] = Field(default=None, alias="errorMessage")


class RegisterResponse(BaseModel):
    model_config = _RESPONSE_CONFIG

    id: Optional[str] = None
    error_message: Optional[str] = Field(default=None, alias="errorMessage")


class ErrorResponse(BaseModel):
    """Yggdrasil error body, e.g. ``{"error": "ForbiddenOperationException", ...}``."""

    model_config = _RESPONSE_CONFIG

    error: Optional[str] = None
    error_message: Optional[str] = Field(default=None, alias="errorMessage")
    cause: Optional[str] = None


ResponseT = TypeVar("ResponseT", bound=BaseModel)


def parse_body(model: Type[ResponseT], body: object) -> ResponseT:
    """
    Leniently parse a decoded JSON body into *model*.

    Top-level fields that do not fit the model are dropped one by one, so a
    malformed ``selectedProfile`` never hides a usable ``accessToken``.
    Anything that is not a JSON object yields an empty instance.
    """
    if not isinstance(body, dict):
        return model()
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        bad_fields = {error["loc"][0] for error in exc.errors() if error.get("loc")}
        logger.warning("Ignoring malformed %s fields %s: %s", model.__name__, sorted(map(str, bad_fields)), exc)

    kept = {key: value for key, value in body.items() if key not in bad_fields}
    try:
        return model.model_validate(kept)
    except ValidationError:
        return model()
