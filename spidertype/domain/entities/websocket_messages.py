"""WebSocket message models for the SpiderType practice service."""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from .achievement import Achievement
from .progress import LevelInfo, StreakRecord, XpAward
from .typing_session import SessionResult, TypingMetrics


# ===== Client → Server Messages =====


class SessionStart(BaseModel):
    """Request a fresh target text and arm a new session."""

    type: Literal["session.start"] = "session.start"
    language_id: Optional[str] = None
    duration_seconds: Optional[int] = Field(default=None, gt=0)


class TypingInput(BaseModel):
    """Full contents of the client's input field after a change."""

    type: Literal["input"] = "input"
    typed_text: str


class SessionClose(BaseModel):
    """Client is leaving the practice run."""

    type: Literal["session.close"] = "session.close"


# Union type for all client messages
ClientMessage = Union[SessionStart, TypingInput, SessionClose]


# ===== Server → Client Messages =====


class SessionReady(BaseModel):
    """A new session is armed and waiting for the first keystroke."""

    type: Literal["session.ready"] = "session.ready"
    session_id: str
    target_text: str
    language_id: str
    duration_seconds: int


class MetricsUpdate(BaseModel):
    """Live metrics after an input change."""

    type: Literal["metrics"] = "metrics"
    state: str
    time_left: int
    metrics: TypingMetrics


class TimerTick(BaseModel):
    """Countdown and WPM sample update."""

    type: Literal["tick"] = "tick"
    time_left: int
    wpm_history: list[int] = Field(default_factory=list)


class SessionFinished(BaseModel):
    """Final scores and progression for a finished session."""

    type: Literal["session.finished"] = "session.finished"
    result: SessionResult
    xp_award: XpAward
    level: LevelInfo
    leveled_up: bool = False
    streak: Optional[StreakRecord] = None
    new_achievements: list[Achievement] = Field(default_factory=list)
    combo: int = 0
    result_saved: bool = True
    message: str = ""


class ServerNotice(BaseModel):
    """Server notice message."""

    type: Literal["notice"] = "notice"
    message: str
    dismissable: bool = True


class ErrorCode(str, Enum):
    """Error codes for WebSocket errors."""

    INVALID_MESSAGE = "INVALID_MESSAGE"
    INVALID_LANGUAGE = "INVALID_LANGUAGE"
    SESSION_RUNNING = "SESSION_RUNNING"
    SESSION_NOT_STARTED = "SESSION_NOT_STARTED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorMessage(BaseModel):
    """Error message from server."""

    type: Literal["error"] = "error"
    code: ErrorCode
    message: str


# Union type for all server messages
ServerMessage = Union[SessionReady, MetricsUpdate, TimerTick, SessionFinished, ServerNotice, ErrorMessage]
