"""Infrastructure layer components."""

from .asyncio_scheduler import AsyncioScheduler
from .local_progress_repository import LocalProgressRepository
from .local_session_result_repository import LocalSessionResultRepository
from .snippet_text_provider import SnippetTextProvider

__all__ = [
    "AsyncioScheduler",
    "LocalProgressRepository",
    "LocalSessionResultRepository",
    "SnippetTextProvider",
]
