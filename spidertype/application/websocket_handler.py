import asyncio
import json
import logging
from typing import Annotated, Any

from pydantic import Field, TypeAdapter, ValidationError
from starlette.websockets import WebSocket, WebSocketDisconnect, WebSocketState

from ..domain.entities import (
    ClientMessage,
    ErrorCode,
    ErrorOutMessage,
    MetricsMessage,
    NoticeMessage,
    OutboundMessage,
    SessionClose,
    SessionFinishedMessage,
    SessionReadyMessage,
    SessionStart,
    TickMessage,
    TypingInput,
)
from ..domain.services import PracticeService

logger = logging.getLogger(__name__)

client_message_adapter = TypeAdapter(Annotated[ClientMessage, Field(discriminator="type")])


class WebSocketHandler:

    def __init__(self, practice_service: PracticeService):
        self._practice_service = practice_service
        self._client_disconnected = False

    async def handle_websocket(self, websocket: WebSocket) -> None:
        # Note: websocket.accept() is called by the API endpoint before this
        send_task = asyncio.create_task(self._send_loop(websocket))
        receive_task = asyncio.create_task(self._receive_loop(websocket))
        try:
            done, _ = await asyncio.wait(
                {send_task, receive_task},
                return_when=asyncio.FIRST_COMPLETED,
            )
            for task in done:
                exc = task.exception()
                if exc:
                    raise exc
        except WebSocketDisconnect:
            logger.info(f"WebSocket disconnected: {websocket.client}")
        except Exception as e:
            logger.error(f"WebSocket error: {e}", exc_info=True)
        finally:
            self._practice_service.close()
            for t in (send_task, receive_task):
                if not t.done():
                    t.cancel()
            await asyncio.gather(send_task, receive_task, return_exceptions=True)

            # Nothing can be sent once the client has gone away
            if not self._client_disconnected and websocket.client_state == WebSocketState.CONNECTED:
                try:
                    await self._flush(websocket)
                    await websocket.close()
                except Exception as e:
                    logger.debug(f"Error closing WebSocket: {e}")
            logger.info(f"WebSocket connection closed: {websocket.client}")

    async def _send_loop(self, websocket: WebSocket) -> None:
        while True:
            item: OutboundMessage = await self._practice_service.outbound_queue.get()
            await self._send(websocket, item)

    async def _flush(self, websocket: WebSocket) -> None:
        """Send whatever is still queued, e.g. the notice confirming a close."""
        queue = self._practice_service.outbound_queue
        while not queue.empty():
            await self._send(websocket, queue.get_nowait())

    async def _send(self, websocket: WebSocket, item: OutboundMessage) -> None:
        logger.debug(f"Sending {type(item).__name__}")

        match item:
            case SessionReadyMessage():
                await websocket.send_text(item.ready.model_dump_json())

            case MetricsMessage():
                await websocket.send_text(item.update.model_dump_json())

            case TickMessage():
                await websocket.send_text(item.tick.model_dump_json())

            case SessionFinishedMessage():
                await websocket.send_text(item.finished.model_dump_json())

            case NoticeMessage():
                await websocket.send_text(item.notice.model_dump_json())

            case ErrorOutMessage():
                await websocket.send_text(item.error.model_dump_json())

            case _:
                # Unknown message type
                raise ValueError(f"Unknown OutboundMessage type: {type(item)}")

    async def _receive_loop(self, websocket: WebSocket) -> None:
        """Receive messages from client and forward to the practice service."""
        while True:
            data = await websocket.receive()

            if data.get("type") == "websocket.disconnect":
                logger.info(f"Client disconnected - received disconnect message: {data}")
                self._client_disconnected = True
                return

            if data.get("text") is None:
                self._reject("Binary messages are not supported")
                continue

            try:
                message = json.loads(data["text"])
            except json.JSONDecodeError as e:
                logger.error(f"Invalid JSON message: {e}")
                self._reject("Message is not valid JSON")
                continue

            if not self._handle_control_message(message):
                break

    def _handle_control_message(self, message: Any) -> bool:
        """Dispatch a JSON control message. Returns False once the client asks to close."""
        try:
            parsed = client_message_adapter.validate_python(message)
        except ValidationError as e:
            logger.warning(f"Rejected client message: {e}")
            self._reject("Unsupported or malformed message")
            return True

        try:
            match parsed:
                case SessionStart():
                    self._practice_service.start_session(parsed.language_id, parsed.duration_seconds)
                case TypingInput():
                    self._practice_service.handle_input(parsed.typed_text)
                case SessionClose():
                    logger.info("Client requested close")
                    self._practice_service.outbound_queue.put_nowait(NoticeMessage("Session closed"))
                    return False
        except Exception as e:
            logger.error(f"Error handling {parsed.type} message: {e}", exc_info=True)
            self._practice_service.outbound_queue.put_nowait(
                ErrorOutMessage(ErrorCode.INTERNAL_ERROR, "Internal server error")
            )
        return True

    def _reject(self, text: str) -> None:
        self._practice_service.outbound_queue.put_nowait(
            ErrorOutMessage(ErrorCode.INVALID_MESSAGE, text)
        )
