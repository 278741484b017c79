"""
ygg-portal Identity Service Client

Thin HTTP wrapper around the Yggdrasil ``authserver`` endpoints.  Every
non-2xx response and every transport failure surfaces as a single
``IdentityServiceError`` so the orchestrator has one thing to classify.
"""

import logging
from typing import Any, Optional

import requests

from .config import Settings, get_settings
from .errors import IdentityServiceError
from .schemas import AuthenticateRequest, RegisterRequest

logger = logging.getLogger(__name__)

AUTHENTICATE_PATH = "/authenticate"
REGISTER_PATH = "/register"


class IdentityClient:
    """Blocking client for ``POST /authenticate`` and ``POST /register``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "IdentityClient":
        settings = settings or get_settings()
        return cls(settings.auth_base_url, timeout=settings.REQUEST_TIMEOUT_SECS)

    def authenticate(self, request: AuthenticateRequest) -> Any:
        """Return the decoded response body of a credential check."""
        return self._post(AUTHENTICATE_PATH, request.to_payload())

    def register(self, request: RegisterRequest) -> Any:
        """Return the decoded response body of an account registration."""
        return self._post(REGISTER_PATH, request.to_payload())

    def _post(self, path: str, payload: dict) -> Any:
        """
        POST *payload* as JSON and return the decoded body.

        A 2xx response whose body is not JSON decodes to ``None``.

        Raises
        ------
        IdentityServiceError
            On connection errors, timeouts and non-2xx statuses.  For the
            latter, ``status_code`` is set and ``body`` holds the JSON error
            object if one was sent.
        """
        url = f"{self.base_url}{path}"
        try:
            response = self._session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("POST %s failed: %s", path, exc)
            raise IdentityServiceError(str(exc)) from exc

        if not response.ok:
            logger.info("POST %s returned HTTP %d", path, response.status_code)
            raise IdentityServiceError(
                f"POST {path} failed ({response.status_code})",
                status_code=response.status_code,
                body=_json_object(response),
            )

        try:
            return response.json()
        except ValueError:
            logger.warning("POST %s returned a non-JSON body", path)
            return None


def _json_object(response: requests.Response) -> Optional[dict]:
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None
