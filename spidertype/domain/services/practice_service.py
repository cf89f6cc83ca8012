"""Practice service: one client's run of consecutive typing sessions."""

import asyncio
import logging
from typing import Any, Iterable, Optional

from ..entities.messages import (
    ErrorOutMessage,
    MetricsMessage,
    NoticeMessage,
    OutboundMessage,
    SessionFinishedMessage,
    SessionReadyMessage,
    TickMessage,
)
from ..entities.outcome import SessionOutcome
from ..entities.typing_session import SessionResult, SessionState
from ..entities.websocket_messages import ErrorCode
from ..interfaces.scheduler import Scheduler
from ..interfaces.text_provider import TextProvider
from .progress_service import ProgressService
from .typing_session import TypingSession

logger = logging.getLogger(__name__)

DEFAULT_DURATIONS = (15, 30, 60, 120)


class PracticeService:
    """
    Per-connection service that runs consecutive typing sessions for a user.

    This service owns:
    - The current TypingSession (only one at a time)
    - The combo counter for the run (starts at 0, never persisted)
    - Emitting messages to the WebSocket layer via an async queue

    The service is unit-testable without sockets.
    """

    def __init__(
        self,
        user_id: str,
        text_provider: TextProvider,
        progress_service: ProgressService,
        scheduler: Scheduler,
        default_language: str = "javascript",
        default_duration: int = 30,
        allowed_durations: Iterable[int] = DEFAULT_DURATIONS,
        overflow_counts_as_error: bool = True,
        tick_interval: float = 1.0,
        metadata: Optional[dict[str, Any]] = None,
    ):
        self.user_id = user_id
        self.text_provider = text_provider
        self.progress_service = progress_service
        self.scheduler = scheduler
        self.default_language = default_language
        self.default_duration = default_duration
        self.allowed_durations = set(allowed_durations)
        self.overflow_counts_as_error = overflow_counts_as_error
        self.tick_interval = tick_interval
        self.metadata = metadata or {}

        self.outbound_queue: asyncio.Queue[OutboundMessage] = asyncio.Queue()

        self.session: Optional[TypingSession] = None
        self.combo: int = 0
        self.outcomes: list[SessionOutcome] = []

        logger.info(f"PracticeService created for user {user_id}")

    def start_session(
        self,
        language_id: Optional[str] = None,
        duration_seconds: Optional[int] = None,
    ) -> Optional[TypingSession]:
        """
        Arm a new session with a fresh target text.

        Args:
            language_id: Snippet pool to draw from (defaults to the configured language)
            duration_seconds: Test length (defaults to the configured duration)

        Returns:
            The armed session, or None if the request was rejected.
        """
        if self.session is not None and self.session.state == SessionState.RUNNING:
            logger.warning(f"User {self.user_id} tried to start a session while one is running")
            self._emit(ErrorOutMessage(ErrorCode.SESSION_RUNNING, "Finish the current session first"))
            return None

        language_id = language_id or self.default_language
        duration_seconds = duration_seconds or self.default_duration
        if duration_seconds not in self.allowed_durations:
            logger.warning(
                f"Unsupported duration {duration_seconds}s for user {self.user_id}; "
                "XP will use the default multiplier"
            )

        try:
            target_text = self.text_provider.get_random_text(language_id)
        except ValueError as e:
            self._emit(ErrorOutMessage(ErrorCode.INVALID_LANGUAGE, str(e)))
            return None

        if self.session is None:
            self.session = TypingSession(
                target_text=target_text,
                duration_seconds=duration_seconds,
                scheduler=self.scheduler,
                language_id=language_id,
                on_finish=self._handle_finish,
                on_tick=self._handle_tick,
                overflow_counts_as_error=self.overflow_counts_as_error,
                tick_interval=self.tick_interval,
            )
        else:
            self.session.language_id = language_id
            self.session.reset(target_text, duration_seconds)

        self._emit(
            SessionReadyMessage(
                session_id=str(self.session.id),
                target_text=target_text,
                language_id=language_id,
                duration_seconds=duration_seconds,
            )
        )
        return self.session

    def handle_input(self, typed_text: str) -> None:
        """
        Apply the client's current input to the active session.

        Args:
            typed_text: Full contents of the input field
        """
        if self.session is None:
            self._emit(ErrorOutMessage(ErrorCode.SESSION_NOT_STARTED, "No session has been started"))
            return

        session = self.session
        metrics = session.type_text(typed_text)
        if session.state == SessionState.FINISHED:
            # The finished message already carries the final metrics
            return
        self._emit(MetricsMessage(state=session.state.value, time_left=session.time_left, metrics=metrics))

    def close(self) -> None:
        """Stop any running timers. An unfinished session is discarded."""
        if self.session is not None:
            self.session.cancel()
        logger.info(f"PracticeService for user {self.user_id} closed after {self.combo} session(s)")

    # ===== Session callbacks =====

    def _handle_tick(self, session: TypingSession) -> None:
        self._emit(TickMessage(time_left=session.time_left, wpm_history=session.wpm_history))

    def _handle_finish(self, result: SessionResult) -> None:
        outcome = self.progress_service.record_session(
            self.user_id, result, combo=self.combo, metadata=self.metadata
        )
        self.combo += 1
        self.outcomes.append(outcome)

        self._emit(SessionFinishedMessage(outcome=outcome))
        if not outcome.result_saved:
            self._emit(NoticeMessage("Result not saved"))

    def _emit(self, message: OutboundMessage) -> None:
        self.outbound_queue.put_nowait(message)

    def get_state(self) -> dict:
        """Get the current run state as a dictionary.

        Returns:
            Dictionary representation of the run state
        """
        session = self.session
        return {
            "user_id": self.user_id,
            "combo": self.combo,
            "completed_sessions": len(self.outcomes),
            "session_id": str(session.id) if session else None,
            "state": session.state.value if session else None,
            "time_left": session.time_left if session else None,
            "language_id": session.language_id if session else None,
        }
