"""
Exception types raised by the portal and handled at the orchestrator boundary.
"""

from typing import Dict, Optional


class PortalError(Exception):
    """Base class for all ygg-portal errors."""


class FormValidationError(PortalError):
    """Raised when form inputs do not satisfy the active request variant."""

    def __init__(self, field_errors: Dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        super().__init__(f"Invalid fields: {', '.join(sorted(self.field_errors))}")


class IdentityServiceError(PortalError):
    """
    A request to the identity service did not produce a 2xx response.

    ``status_code`` is ``None`` when no HTTP response was received at all
    (connection refused, timeout...).  ``body`` holds the decoded JSON error
    object when the server sent one, otherwise ``None``.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[dict] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def has_body(self) -> bool:
        return self.body is not None
