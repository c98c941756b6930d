import sys
from itertools import count
from pathlib import Path

import pytest

# Get the project root directory
project_dir = Path(__file__).parent.parent.absolute()

# Add project directory to Python path if not already there
if str(project_dir) not in sys.path:
    sys.path.insert(0, str(project_dir))

from color_changer.runtime.agents.request_router import RequestRouter
from color_changer.runtime.agents.state_machine import SessionStateMachine
from color_changer.runtime.models.request_models import (
    InputEvent,
    InputHandlerEvent,
    InputHandlerEventRequest,
    Intent,
    IntentRequest,
    LaunchRequest,
    SessionEndedRequest,
)
from color_changer.runtime.store.session_store import SessionStore


class RequestFactory:
    """Builds inbound requests with unique request ids."""

    def __init__(self):
        self._ids = count(1)

    def next_id(self):
        return f"req-{next(self._ids)}"

    def launch(self):
        return LaunchRequest(request_id=self.next_id())

    def intent(self, name, **slots):
        return IntentRequest(
            request_id=self.next_id(),
            intent=Intent(name=name, slots=slots),
        )

    def event(self, name, *gadget_ids):
        return InputHandlerEvent(
            name=name,
            input_events=[InputEvent(gadget_id=g, action="down") for g in gadget_ids],
        )

    def report(self, watcher_id, *events):
        return InputHandlerEventRequest(
            request_id=self.next_id(),
            originating_request_id=watcher_id,
            events=list(events),
        )

    def session_ended(self, reason="USER_INITIATED"):
        return SessionEndedRequest(request_id=self.next_id(), reason=reason)


class RecordingLogStore:
    """Log sink that keeps events in memory for assertions."""

    def __init__(self):
        self.events = []

    def log_event(self, event_type, payload):
        self.events.append((event_type, payload))


@pytest.fixture
def req():
    """Factory for inbound requests"""
    return RequestFactory()


@pytest.fixture
def state_machine():
    """State machine with the default timeouts, independent of the environment"""
    return SessionStateMachine(
        roll_call_timeout_ms=50000,
        roll_call_retry_timeout_ms=30000,
        play_timeout_ms=30000,
    )


@pytest.fixture
def session_store():
    """In-memory session store"""
    return SessionStore()


@pytest.fixture
def log_store():
    return RecordingLogStore()


@pytest.fixture
def router(session_store, state_machine, log_store):
    """Router wired to an in-memory store"""
    return RequestRouter(
        session_store=session_store,
        state_machine=state_machine,
        log_store=log_store,
    )
