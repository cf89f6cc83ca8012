"""Domain services for the SpiderType typing engine."""

from .practice_service import PracticeService
from .progress_service import ProgressService
from .typing_session import SessionStateError, TypingSession

__all__ = ["PracticeService", "ProgressService", "SessionStateError", "TypingSession"]
