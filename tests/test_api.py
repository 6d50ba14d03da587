"""HTTP transport: routes, error mapping and response shape."""

import pytest
from fastapi.testclient import TestClient

from rsvpbot.main import app
from rsvpbot.services.flow_service import FlowController
from rsvpbot.services.session_service import SessionService, get_session_service
from rsvpbot.services.state_store import InMemoryStateStore, PersistenceError


class BrokenStore(InMemoryStateStore):
    async def load(self, cid):
        raise PersistenceError("database is locked")


class ExplodingController(FlowController):
    def step(self, state, profile, text):
        raise RuntimeError("registry offline at /srv/rsvpbot")


@pytest.fixture
def client_for(controller):
    def make(store, flow=None):
        service = SessionService(store, flow or controller, welcome_message="Welcome!", bot_id="bot")
        app.dependency_overrides[get_session_service] = lambda: service
        return TestClient(app)

    yield make
    app.dependency_overrides.clear()


def test_health(client_for):
    resp = client_for(InMemoryStateStore()).get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_message_turns(client_for):
    client = client_for(InMemoryStateStore())
    resp = client.post("/conversations/c1/messages", json={"text": "RSVP"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["flow_state"]["active_action"] == "RSVP"
    assert body["flow_state"]["last_question_asked"] == "NAME"
    assert body["messages"][0]["text"].endswith("What is your name?")

    body = client.post("/conversations/c1/messages", json={"text": "Alice"}).json()
    assert body["profile"]["name"] == "Alice"
    assert [m["text"] for m in body["messages"]] == ["Welcome among us Alice.", "How old are you?"]


def test_member_joined(client_for):
    client = client_for(InMemoryStateStore())
    body = client.post("/conversations/c1/members", json={"member_id": "user-1"}).json()
    assert body["messages"][0]["text"] == "Welcome!"
    assert body["messages"][1]["menu"]["prompt"] == "What do you want to do ?"


def test_reset(client_for):
    store = InMemoryStateStore()
    client = client_for(store)
    client.post("/conversations/c1/messages", json={"text": "RSVP"})
    resp = client.delete("/conversations/c1")
    assert resp.json() == {"conversation_id": "c1", "reset": True}
    assert store.rows == {}


def test_persistence_failure_is_503(client_for):
    client = client_for(BrokenStore())
    resp = client.post("/conversations/c1/messages", json={"text": "RSVP"})
    assert resp.status_code == 503


def test_missing_text_is_422(client_for):
    resp = client_for(InMemoryStateStore()).post("/conversations/c1/messages", json={})
    assert resp.status_code == 422


def test_unexpected_error_is_500_without_details(client_for, recognizer):
    client = client_for(InMemoryStateStore(), ExplodingController(recognizer))
    resp = client.post("/conversations/c1/messages", json={"text": "RSVP"})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "Conversation error"
    assert "registry offline" not in resp.text


def test_non_ascii_answers_are_sent_unescaped(client_for):
    client = client_for(InMemoryStateStore())
    client.post("/conversations/c1/messages", json={"text": "RSVP"})
    resp = client.post("/conversations/c1/messages", json={"text": "José"})
    assert "charset=utf-8" in resp.headers["content-type"]
    assert "Welcome among us José.".encode("utf-8") in resp.content


def test_cors_allows_browser_clients(client_for):
    resp = client_for(InMemoryStateStore()).get("/health", headers={"Origin": "https://chat.example.com"})
    assert resp.headers["access-control-allow-origin"] == "*"
