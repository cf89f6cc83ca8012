"""Typing session entities for the SpiderType engine."""
import uuid
from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SessionState(str, Enum):
    """Lifecycle states of a single timed typing attempt."""
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"


class KeystrokeSnapshot(BaseModel):
    """Point-in-time view of a running session, fed to the metrics engine."""

    model_config = ConfigDict(frozen=True)

    typed_text: str = ""
    target_text: str = ""
    elapsed_ms: float = Field(default=0.0, ge=0)


class TypingMetrics(BaseModel):
    """Metrics derived from one keystroke snapshot."""

    model_config = ConfigDict(frozen=True)

    correct_char_count: int = Field(default=0, ge=0)
    incorrect_char_count: int = Field(default=0, ge=0)
    error_count: int = Field(default=0, ge=0)
    accuracy_percent: int = Field(default=100, ge=0, le=100)
    wpm_net: int = Field(default=0, ge=0)
    wpm_raw: int = Field(default=0, ge=0)


class SessionResult(BaseModel):
    """Immutable result of one completed typing session."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid.uuid4)
    wpm_net: int = Field(ge=0)
    wpm_raw: int = Field(ge=0)
    accuracy_percent: int = Field(ge=0, le=100)
    consistency_percent: int = Field(default=0, ge=0, le=100)
    error_count: int = Field(default=0, ge=0)
    correct_char_count: int = Field(default=0, ge=0)
    incorrect_char_count: int = Field(default=0, ge=0)
    duration_seconds: int = Field(gt=0)
    wpm_history: list[int] = Field(default_factory=list)
    language_id: str = "javascript"
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def is_perfect(self) -> bool:
        return self.accuracy_percent >= 100
