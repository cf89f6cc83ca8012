"""Unit tests for WebSocketHandler over a fake socket."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.websockets import WebSocketState

from spidertype.application.websocket_handler import WebSocketHandler
from spidertype.domain.entities import ErrorCode, ErrorOutMessage, SessionState
from spidertype.domain.services import PracticeService
from spidertype.infrastructure.snippet_text_provider import SnippetTextProvider


def text_frame(payload: dict) -> dict:
    return {"type": "websocket.receive", "text": json.dumps(payload)}


def fake_websocket(frames: list) -> MagicMock:
    """Create a connected socket that yields the given frames in order."""
    websocket = MagicMock()
    websocket.client = ("127.0.0.1", 50000)
    websocket.client_state = WebSocketState.CONNECTED
    websocket.receive = AsyncMock(side_effect=frames)
    websocket.send_text = AsyncMock()
    websocket.close = AsyncMock()
    return websocket


def sent_messages(websocket) -> list[dict]:
    return [json.loads(call.args[0]) for call in websocket.send_text.await_args_list]


@pytest.fixture
def practice_service(progress_service, scheduler):
    """Create a practice service with a single three-letter snippet."""
    return PracticeService(
        user_id="user-1",
        text_provider=SnippetTextProvider(snippets={"python": ["abc"]}),
        progress_service=progress_service,
        scheduler=scheduler,
        default_language="python",
    )


class TestConnectionEnd:
    """Tests for the two ways a connection ends."""

    @pytest.mark.asyncio
    async def test_client_disconnect_mid_session(self, practice_service, scheduler, result_repository):
        """Test that a dropped client ends the handler without sending or closing."""
        websocket = fake_websocket([
            text_frame({"type": "session.start"}),
            text_frame({"type": "input", "typed_text": "a"}),
            {"type": "websocket.disconnect", "code": 1001},
        ])
        handler = WebSocketHandler(practice_service)

        await asyncio.wait_for(handler.handle_websocket(websocket), timeout=1)

        websocket.close.assert_not_awaited()
        assert scheduler.pending == []
        assert practice_service.session.state == SessionState.FINISHED
        assert practice_service.session.result is None
        assert result_repository.list_results("user-1") == []

    @pytest.mark.asyncio
    async def test_session_close_flushes_notice(self, practice_service):
        """Test that a requested close delivers the closing notice and then closes."""
        websocket = fake_websocket([
            text_frame({"type": "session.start"}),
            text_frame({"type": "session.close"}),
        ])
        handler = WebSocketHandler(practice_service)

        await asyncio.wait_for(handler.handle_websocket(websocket), timeout=1)

        messages = sent_messages(websocket)
        assert [m["type"] for m in messages] == ["session.ready", "notice"]
        assert messages[-1]["message"] == "Session closed"
        websocket.close.assert_awaited_once()


class TestControlMessages:
    """Tests for dispatching parsed client messages."""

    def test_unexpected_failure_reports_internal_error(self):
        """Test that a failing service call becomes an error message and the socket stays open."""
        practice = MagicMock()
        practice.outbound_queue = asyncio.Queue()
        practice.start_session.side_effect = RuntimeError("snippet store down")
        handler = WebSocketHandler(practice)

        keep_open = handler._handle_control_message({"type": "session.start"})

        assert keep_open is True
        queued = practice.outbound_queue.get_nowait()
        assert isinstance(queued, ErrorOutMessage)
        assert queued.error.code == ErrorCode.INTERNAL_ERROR
        assert practice.outbound_queue.empty()

    def test_malformed_message_is_rejected(self):
        practice = MagicMock()
        practice.outbound_queue = asyncio.Queue()
        handler = WebSocketHandler(practice)

        keep_open = handler._handle_control_message({"type": "input"})

        assert keep_open is True
        assert practice.outbound_queue.get_nowait().error.code == ErrorCode.INVALID_MESSAGE
        practice.handle_input.assert_not_called()
