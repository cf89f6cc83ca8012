"""Session timer and state machine for one timed typing attempt."""

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional

from ..entities.typing_session import (
    KeystrokeSnapshot,
    SessionResult,
    SessionState,
    TypingMetrics,
)
from ..interfaces.scheduler import Scheduler, TimerHandle
from .metrics import compute_metrics, consistency_score, sample_wpm

logger = logging.getLogger(__name__)


class SessionStateError(RuntimeError):
    """Raised when an operation is not allowed in the session's current state."""


class TypingSession:
    """
    State machine for a single typing attempt: IDLE -> RUNNING -> FINISHED.

    The first non-empty input starts the clock and arms two independent
    one-second timers, a countdown and a WPM sampler. The session finishes
    when the countdown reaches zero or the input covers the whole target,
    whichever happens first. Finalization runs exactly once per session.

    Timers come from an injected scheduler, so the machine is unit-testable
    without an event loop.
    """

    def __init__(
        self,
        target_text: str,
        duration_seconds: int,
        scheduler: Scheduler,
        language_id: str = "javascript",
        on_finish: Optional[Callable[[SessionResult], None]] = None,
        on_tick: Optional[Callable[["TypingSession"], None]] = None,
        overflow_counts_as_error: bool = True,
        tick_interval: float = 1.0,
    ):
        self.scheduler = scheduler
        self.language_id = language_id
        self.on_finish = on_finish
        self.on_tick = on_tick
        self.overflow_counts_as_error = overflow_counts_as_error
        self.tick_interval = tick_interval

        self._countdown_timer: Optional[TimerHandle] = None
        self._sample_timer: Optional[TimerHandle] = None
        self._reset_state(target_text, duration_seconds)

    def _reset_state(self, target_text: str, duration_seconds: int) -> None:
        self.id = uuid.uuid4()
        self.target_text = target_text
        self.duration_seconds = duration_seconds
        self.state = SessionState.IDLE
        self.typed_text = ""
        self.time_left = duration_seconds
        self.start_time: Optional[float] = None
        self.wpm_history: list[int] = []
        self.metrics = TypingMetrics()
        self.result: Optional[SessionResult] = None
        self._finalized = False

    # ===== Public API =====

    def type_text(self, value: str) -> TypingMetrics:
        """
        Feed the full current contents of the input field.

        Args:
            value: Everything typed so far (not a single keystroke).

        Returns:
            TypingMetrics: Metrics for the new input, or the frozen metrics
            if the session has already finished.
        """
        if self.state == SessionState.FINISHED:
            logger.warning(f"Session {self.id} already finished; ignoring input")
            return self.metrics

        if self.state == SessionState.IDLE:
            if not value:
                return self.metrics
            self._start()

        self.typed_text = value
        self.metrics = compute_metrics(self.snapshot(), self.overflow_counts_as_error)

        if len(value) >= len(self.target_text):
            self.finish()

        return self.metrics

    def snapshot(self) -> KeystrokeSnapshot:
        return KeystrokeSnapshot(
            typed_text=self.typed_text,
            target_text=self.target_text,
            elapsed_ms=self.elapsed_ms(),
        )

    def elapsed_ms(self) -> float:
        if self.start_time is None:
            return 0.0
        return max(0.0, (self.scheduler.now() - self.start_time) * 1000)

    def finish(self) -> Optional[SessionResult]:
        """
        Move to FINISHED and finalize the session.

        Safe to call from any trigger any number of times: only the first
        call freezes the metrics, builds the result and invokes
        ``on_finish``. Later calls return the same result.
        """
        if self._finalized:
            return self.result
        self._finalized = True

        self._cancel_timers()
        self.state = SessionState.FINISHED

        snapshot = self.snapshot()
        self.metrics = compute_metrics(snapshot, self.overflow_counts_as_error)
        self.result = SessionResult(
            wpm_net=self.metrics.wpm_net,
            wpm_raw=self.metrics.wpm_raw,
            accuracy_percent=self.metrics.accuracy_percent,
            consistency_percent=consistency_score(self.wpm_history),
            error_count=self.metrics.error_count,
            correct_char_count=self.metrics.correct_char_count,
            incorrect_char_count=self.metrics.incorrect_char_count,
            duration_seconds=self.duration_seconds,
            wpm_history=list(self.wpm_history),
            language_id=self.language_id,
            timestamp=datetime.now(),
        )
        logger.info(
            f"Session {self.id} finished: {self.result.wpm_net} wpm, "
            f"{self.result.accuracy_percent}% accuracy, "
            f"{self.result.consistency_percent}% consistency"
        )

        if self.on_finish is not None:
            try:
                self.on_finish(self.result)
            except Exception as e:
                logger.error(f"Error in finish handler for session {self.id}: {e}", exc_info=True)

        return self.result

    def reset(self, target_text: str, duration_seconds: Optional[int] = None) -> None:
        """
        Prepare a fresh attempt with a new target text and zeroed counters.

        Raises:
            SessionStateError: If the session is still running.
        """
        if self.state == SessionState.RUNNING:
            raise SessionStateError(f"Session {self.id} is running and cannot be reset")
        self._cancel_timers()
        self._reset_state(
            target_text,
            duration_seconds if duration_seconds is not None else self.duration_seconds,
        )
        logger.info(f"Session reset as {self.id} ({self.duration_seconds}s, {self.language_id})")

    def cancel(self) -> None:
        """
        Abandon the attempt without finalizing (e.g. the client went away).

        A running session moves to FINISHED with no result and never calls
        ``on_finish``. It can be reused with ``reset``.
        """
        self._cancel_timers()
        if self.state == SessionState.RUNNING:
            self.state = SessionState.FINISHED
            self._finalized = True
            logger.info(f"Session {self.id} cancelled before finishing")

    # ===== Timer handling =====

    def _start(self) -> None:
        self.state = SessionState.RUNNING
        self.start_time = self.scheduler.now()
        self._countdown_timer = self.scheduler.after(self.tick_interval, self._on_countdown)
        self._sample_timer = self.scheduler.after(self.tick_interval, self._on_sample)
        logger.info(f"Session {self.id} started ({self.duration_seconds}s)")

    def _on_countdown(self) -> None:
        if self.state != SessionState.RUNNING:
            return
        self.time_left = max(0, self.time_left - 1)
        logger.debug(f"Session {self.id}: {self.time_left}s left")
        if self.on_tick is not None:
            self.on_tick(self)
        if self.time_left <= 0:
            # The sampler shares this deadline and may not have fired yet
            if (
                self.state == SessionState.RUNNING
                and len(self.wpm_history) < self.duration_seconds - self.time_left
            ):
                self._take_sample()
            self.finish()
            return
        self._countdown_timer = self.scheduler.after(self.tick_interval, self._on_countdown)

    def _on_sample(self) -> None:
        if self.state != SessionState.RUNNING:
            return
        self._take_sample()
        self._sample_timer = self.scheduler.after(self.tick_interval, self._on_sample)

    def _take_sample(self) -> None:
        self.wpm_history.append(sample_wpm(len(self.typed_text), self.elapsed_ms()))

    def _cancel_timers(self) -> None:
        for timer in (self._countdown_timer, self._sample_timer):
            if timer is not None:
                timer.cancel()
        self._countdown_timer = None
        self._sample_timer = None
