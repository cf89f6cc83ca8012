"""Domain interfaces for the SpiderType typing engine."""

from .progress_repository import ProgressRepository
from .scheduler import Scheduler, TimerHandle
from .session_result_repository import SessionResultRepository
from .text_provider import TextProvider

__all__ = [
    "ProgressRepository",
    "Scheduler",
    "SessionResultRepository",
    "TextProvider",
    "TimerHandle",
]
