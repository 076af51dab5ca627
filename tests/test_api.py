# tests/test_api.py

from fastapi.testclient import TestClient

from agent.core.templates import get_templates
from app.main import app


client = TestClient(app)
TEMPLATES = get_templates()


def test_single_greeting_message():
    resp = client.post("/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]})
    assert resp.status_code == 200
    assert resp.json() == {"message": TEMPLATES["greeting"]}


def test_single_message_greets_even_with_keywords():
    resp = client.post(
        "/api/chat",
        json={"messages": [{"role": "user", "content": "What about the timeline and milestones?"}]},
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == TEMPLATES["greeting"]


def test_multi_turn_budget():
    messages = [
        {"role": "user", "content": "Namaste"},
        {"role": "assistant", "content": TEMPLATES["greeting"]},
        {"role": "user", "content": "Create a comprehensive budget"},
    ]
    resp = client.post("/api/chat", json={"messages": messages})
    assert resp.status_code == 200
    assert resp.json()["message"] == TEMPLATES["budget"]


def test_no_user_message():
    resp = client.post("/api/chat", json={"messages": [{"role": "assistant", "content": "hello"}]})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No user message found"}


def test_messages_not_a_list():
    resp = client.post("/api/chat", json={"messages": "not-an-array"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid messages format"}


def test_messages_missing_or_null():
    for body in ({}, {"messages": None}, {"messages": {"role": "user"}}):
        resp = client.post("/api/chat", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid messages format"}


def test_unknown_role_rejected():
    resp = client.post("/api/chat", json={"messages": [{"role": "moderator", "content": "hi"}]})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid messages format"}


def test_malformed_json_is_internal_error():
    resp = client.post(
        "/api/chat",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}


def test_health_checks():
    assert client.get("/api/chat").json() == {"status": "ok"}
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_route_delegates_to_dispatch(monkeypatch):
    import app.main as main_module

    seen = []

    def fake_dispatch(messages):
        seen.append(messages)
        return "dispatched"

    monkeypatch.setattr(main_module, "dispatch", fake_dispatch)
    messages = [{"role": "user", "content": "budget"}]
    resp = client.post("/api/chat", json={"messages": messages})
    assert resp.json() == {"message": "dispatched"}
    assert seen == [messages]
