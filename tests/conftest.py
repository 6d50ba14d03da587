import pytest

from rsvpbot.services.recognizer import NumberRecognizer
from rsvpbot.services.flow_service import FlowController
from rsvpbot.services.session_service import SessionService
from rsvpbot.services.state_store import InMemoryStateStore


@pytest.fixture(scope="session")
def recognizer():
    return NumberRecognizer()


@pytest.fixture
def controller(recognizer):
    return FlowController(recognizer)


@pytest.fixture
def store():
    return InMemoryStateStore()


@pytest.fixture
def service(store, controller):
    return SessionService(store, controller, welcome_message="Welcome!", bot_id="bot")
