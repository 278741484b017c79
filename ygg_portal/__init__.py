"""
ygg-portal -- login / register client for a Yggdrasil identity service

Public API:
    SubmissionOrchestrator -- mode flag, busy flag, submit and classify
    FormInputs, Mode       -- raw form values and the active form mode
    validate_form          -- per-field errors for the active mode
    SessionState           -- shared session value replaced on success
"""

from .orchestrator import Outcome, SubmissionOrchestrator, SubmitResult  # noqa: F401
from .session import MemorySessionCell, SessionState  # noqa: F401
from .validation import FormInputs, Mode, build_request, validate_form  # noqa: F401
