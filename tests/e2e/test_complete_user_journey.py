"""
End-to-end test for the typing practice user journey.

This test covers the complete user flow over the real app:
1. GET /languages (user picks a language)
2. WebSocket connection with a user_id
3. session.start and the target text
4. Partial input and live metrics
5. Completing the text and the finished session with XP and achievements
6. A second session in the same run (combo)
7. session.close and the closing notice
8. GET /users/{user_id}/stats reflecting the run
"""

import uuid

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from spidertype.application.api import app


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def user_id():
    """Create a user id that no other test has used."""
    return f"journey-{uuid.uuid4()}"


def receive_until(websocket, message_type: str) -> dict:
    """Receive messages, skipping countdown ticks, until one of the given type arrives."""
    while True:
        message = websocket.receive_json()
        if message["type"] == message_type:
            return message
        assert message["type"] == "tick", f"Unexpected message: {message}"


def play_session(websocket, language_id: str = "python") -> dict:
    """Run one session to completion and return the finished message."""
    websocket.send_json({"type": "session.start", "language_id": language_id, "duration_seconds": 30})
    ready = receive_until(websocket, "session.ready")
    target = ready["target_text"]

    websocket.send_json({"type": "input", "typed_text": target[0]})
    metrics = receive_until(websocket, "metrics")
    assert metrics["state"] == "running"
    assert metrics["metrics"]["correct_char_count"] == 1

    websocket.send_json({"type": "input", "typed_text": target})
    return receive_until(websocket, "session.finished")


def test_complete_user_journey(client, user_id):
    """Test a full practice run from language pick to stats."""
    languages = client.get("/languages").json()["languages"]
    assert "python" in languages

    with client.websocket_connect(f"/ws?user_id={user_id}") as websocket:
        first = play_session(websocket)

        assert first["result_saved"] is True
        assert first["combo"] == 0
        assert first["result"]["accuracy_percent"] == 100
        assert first["result"]["language_id"] == "python"
        assert first["streak"]["current_streak"] == 1
        assert "first_test" in [a["id"] for a in first["new_achievements"]]
        assert first["xp_award"]["total"] > 0
        assert first["message"]

        second = play_session(websocket, language_id="go")

        assert second["combo"] == 1
        assert second["xp_award"]["multiplier"] == pytest.approx(1.05)
        assert second["streak"]["tests_today"] == 2
        assert "first_test" not in [a["id"] for a in second["new_achievements"]]

        websocket.send_json({"type": "session.close"})
        notice = receive_until(websocket, "notice")
        assert notice["message"] == "Session closed"

    stats = client.get(f"/users/{user_id}/stats").json()
    assert stats["total_tests"] == 2
    assert stats["tests_today"] == 2
    assert stats["best_wpm"] >= 0
    assert stats["total_xp"] == first["xp_award"]["total"] + second["xp_award"]["total"]


def test_invalid_messages_are_rejected(client, user_id):
    """Test that malformed client messages produce errors without closing the socket."""
    with client.websocket_connect(f"/ws?user_id={user_id}") as websocket:
        websocket.send_text("not json")
        assert receive_until(websocket, "error")["code"] == "INVALID_MESSAGE"

        websocket.send_json({"type": "bogus"})
        assert receive_until(websocket, "error")["code"] == "INVALID_MESSAGE"

        websocket.send_json({"type": "input", "typed_text": "abc"})
        assert receive_until(websocket, "error")["code"] == "SESSION_NOT_STARTED"

        websocket.send_json({"type": "session.start", "language_id": "cobol"})
        assert receive_until(websocket, "error")["code"] == "INVALID_LANGUAGE"

        websocket.send_json({"type": "session.start"})
        ready = receive_until(websocket, "session.ready")
        assert ready["duration_seconds"] == 30

        websocket.send_json({"type": "session.close"})
        assert receive_until(websocket, "notice")["message"] == "Session closed"


def test_missing_user_id_is_refused(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws"):
            pass
