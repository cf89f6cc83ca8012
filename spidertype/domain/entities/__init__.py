"""Domain entities for the SpiderType typing engine."""

from .achievement import Achievement, AchievementContext, UnlockedAchievement
from .messages import (
    ErrorOutMessage,
    MetricsMessage,
    NoticeMessage,
    OutboundMessage,
    SessionFinishedMessage,
    SessionReadyMessage,
    TickMessage,
)
from .outcome import SessionOutcome, UserStats
from .progress import LevelInfo, StreakRecord, StreakUpdate, XpAward
from .typing_session import (
    KeystrokeSnapshot,
    SessionResult,
    SessionState,
    TypingMetrics,
)
from .websocket_messages import (
    ClientMessage,
    ErrorCode,
    ErrorMessage,
    MetricsUpdate,
    ServerMessage,
    ServerNotice,
    SessionClose,
    SessionFinished,
    SessionReady,
    SessionStart,
    TimerTick,
    TypingInput,
)

__all__ = [
    # Session entities
    "KeystrokeSnapshot",
    "TypingMetrics",
    "SessionResult",
    "SessionState",
    # Progression entities
    "XpAward",
    "LevelInfo",
    "StreakRecord",
    "StreakUpdate",
    "SessionOutcome",
    "UserStats",
    # Achievement entities
    "Achievement",
    "AchievementContext",
    "UnlockedAchievement",
    # Message entities
    "OutboundMessage",
    "SessionReadyMessage",
    "MetricsMessage",
    "TickMessage",
    "SessionFinishedMessage",
    "NoticeMessage",
    "ErrorOutMessage",
    # WebSocket message entities
    "ClientMessage",
    "ServerMessage",
    "SessionStart",
    "TypingInput",
    "SessionClose",
    "SessionReady",
    "MetricsUpdate",
    "TimerTick",
    "SessionFinished",
    "ServerNotice",
    "ErrorMessage",
    "ErrorCode",
]
