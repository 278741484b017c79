"""
Shared pytest fixtures for the ygg-portal test suite.

The orchestrator is wired to in-memory fakes: a scripted identity client,
a recording notifier and a plain session cell, with a frozen clock.
"""

from datetime import datetime, timezone

import pytest

from ygg_portal.orchestrator import SubmissionOrchestrator
from ygg_portal.session import MemorySessionCell

FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class RecordingNotifier:
    """Collects ``(message, severity)`` pairs in call order."""

    def __init__(self):
        self.messages = []

    def notify(self, message, severity):
        self.messages.append((message, severity))

    @property
    def texts(self):
        return [message for message, _ in self.messages]


class ScriptedClient:
    """
    Stand-in for ``IdentityClient``.

    ``authenticate_result`` / ``register_result`` are returned as the decoded
    body, or raised if they are exceptions.  ``on_call`` runs while the
    request is "in flight".
    """

    def __init__(self):
        self.calls = []
        self.authenticate_result = None
        self.register_result = None
        self.on_call = None

    def authenticate(self, request):
        return self._respond("authenticate", request, self.authenticate_result)

    def register(self, request):
        return self._respond("register", request, self.register_result)

    def _respond(self, endpoint, request, result):
        self.calls.append((endpoint, request.to_payload()))
        if self.on_call is not None:
            self.on_call()
        if isinstance(result, Exception):
            raise result
        return result


class FakeSettings:
    """Minimal settings object for client tests."""

    auth_base_url = "http://auth.test/authserver"
    REQUEST_TIMEOUT_SECS = 5
    SHOW_TOKEN_IN_NOTIFICATION = True


@pytest.fixture()
def notifier():
    return RecordingNotifier()


@pytest.fixture()
def client():
    return ScriptedClient()


@pytest.fixture()
def cell():
    return MemorySessionCell()


@pytest.fixture()
def orchestrator(client, cell, notifier):
    return SubmissionOrchestrator(
        client=client,
        cell=cell,
        notifier=notifier,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture()
def fixed_now():
    return FIXED_NOW


@pytest.fixture()
def settings():
    return FakeSettings()
