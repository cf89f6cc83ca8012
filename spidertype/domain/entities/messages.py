"""Outbound message entities."""

from dataclasses import dataclass, field

from .outcome import SessionOutcome
from .typing_session import TypingMetrics
from .websocket_messages import (
    ErrorCode,
    ErrorMessage,
    MetricsUpdate,
    ServerNotice,
    SessionFinished,
    SessionReady,
    TimerTick,
)


class OutboundMessage:
    """Base class for outbound messages."""

    pass


@dataclass
class SessionReadyMessage(OutboundMessage):
    """Message announcing a freshly armed session."""

    session_id: str
    target_text: str
    language_id: str
    duration_seconds: int
    ready: SessionReady = field(init=False)

    def __post_init__(self):
        self.ready = SessionReady(
            session_id=self.session_id,
            target_text=self.target_text,
            language_id=self.language_id,
            duration_seconds=self.duration_seconds,
        )


@dataclass
class MetricsMessage(OutboundMessage):
    """Message containing live metrics for the current input."""

    state: str
    time_left: int
    metrics: TypingMetrics
    update: MetricsUpdate = field(init=False)

    def __post_init__(self):
        self.update = MetricsUpdate(
            state=self.state, time_left=self.time_left, metrics=self.metrics
        )


@dataclass
class TickMessage(OutboundMessage):
    """Message containing the countdown and WPM samples so far."""

    time_left: int
    wpm_history: list[int] = field(default_factory=list)
    tick: TimerTick = field(init=False)

    def __post_init__(self):
        self.tick = TimerTick(time_left=self.time_left, wpm_history=list(self.wpm_history))


@dataclass
class SessionFinishedMessage(OutboundMessage):
    """Message carrying the outcome of a finished session."""

    outcome: SessionOutcome
    finished: SessionFinished = field(init=False)

    def __post_init__(self):
        outcome = self.outcome
        self.finished = SessionFinished(
            result=outcome.result,
            xp_award=outcome.xp_award,
            level=outcome.level_after,
            leveled_up=outcome.leveled_up,
            streak=outcome.streak,
            new_achievements=outcome.new_achievements,
            combo=outcome.combo,
            result_saved=outcome.result_saved,
            message=outcome.motivational_message,
        )


@dataclass
class NoticeMessage(OutboundMessage):
    """Message containing a notice."""

    message: str
    notice: ServerNotice = field(init=False)

    def __post_init__(self):
        self.notice = ServerNotice(message=self.message)


@dataclass
class ErrorOutMessage(OutboundMessage):
    """Message containing an error."""

    code: ErrorCode
    message: str
    error: ErrorMessage = field(init=False)

    def __post_init__(self):
        self.error = ErrorMessage(code=self.code, message=self.message)
