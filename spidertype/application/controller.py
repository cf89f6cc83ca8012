"""SpiderType Controller for handling business logic and coordination."""

import logging
from typing import Any, Optional

from fastapi import WebSocket

from ..domain.entities import LevelInfo, UserStats
from ..domain.interfaces.scheduler import Scheduler
from ..domain.interfaces.text_provider import TextProvider
from ..domain.services import PracticeService, ProgressService
from ..domain.services.achievement_evaluator import ACHIEVEMENTS
from ..domain.services.level_resolver import calculate_level
from ..infrastructure.asyncio_scheduler import AsyncioScheduler
from .config import Settings
from .websocket_handler import WebSocketHandler

logger = logging.getLogger(__name__)


class SpiderTypeController:
    """
    Controller for coordinating typing practice operations.

    This controller is injected with all necessary providers and handles
    the business logic for each endpoint, keeping the API layer thin.
    """

    def __init__(
        self,
        text_provider: TextProvider,
        progress_service: ProgressService,
        settings: Settings,
        scheduler: Optional[Scheduler] = None,
    ):
        """
        Initialize the controller with injected dependencies.

        Args:
            text_provider: Provider for target texts
            progress_service: Service that scores and stores finished sessions
            settings: Session defaults and limits
            scheduler: Clock and timers (defaults to the running asyncio loop)
        """
        self.text_provider = text_provider
        self.progress_service = progress_service
        self.settings = settings
        self.scheduler = scheduler

        logger.info("SpiderTypeController initialized with providers")

    def create_practice_service(
        self, user_id: str, metadata: Optional[dict[str, Any]] = None
    ) -> PracticeService:
        """Create a practice run for one connected user."""
        return PracticeService(
            user_id=user_id,
            text_provider=self.text_provider,
            progress_service=self.progress_service,
            scheduler=self.scheduler or AsyncioScheduler(),
            default_language=self.settings.default_language,
            default_duration=self.settings.default_duration,
            allowed_durations=self.settings.allowed_durations,
            overflow_counts_as_error=self.settings.overflow_counts_as_error,
            tick_interval=self.settings.tick_interval_seconds,
            metadata=metadata,
        )

    async def handle_websocket_connection(
        self,
        websocket: WebSocket,
        user_id: str,
    ) -> None:
        logger.info(f"Handling new WebSocket connection from {websocket.client} for user {user_id}")

        metadata = {"user_agent": websocket.headers.get("user-agent", "")}
        practice_service = self.create_practice_service(user_id, metadata=metadata)
        handler = WebSocketHandler(practice_service=practice_service)

        try:
            await handler.handle_websocket(websocket)
        finally:
            practice_service.close()
            logger.info(f"Practice run for user {user_id} ended with combo {practice_service.combo}")

    def get_health_status(self) -> dict:
        """
        Get application health status.

        Returns:
            Dict containing health status information
        """
        return {
            "status": "healthy",
            "providers": {
                "text_provider": type(self.text_provider).__name__,
                "progress_repository": type(self.progress_service.progress_repository).__name__,
                "session_result_repository": type(self.progress_service.session_result_repository).__name__,
            },
        }

    def get_languages(self) -> list[str]:
        return self.text_provider.list_languages()

    def get_achievements(self) -> list[dict]:
        return [achievement.model_dump() for achievement in ACHIEVEMENTS.values()]

    def get_user_stats(self, user_id: str) -> UserStats:
        """
        Get the dashboard summary for a user.

        Args:
            user_id: The unique identifier of the user.

        Returns:
            UserStats for the user (zeroed for users with no sessions).
        """
        return self.progress_service.get_user_stats(user_id)

    def get_level(self, total_xp: int) -> LevelInfo:
        return calculate_level(total_xp)
