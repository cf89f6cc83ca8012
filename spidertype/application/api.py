"""FastAPI application entry point."""

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Path, Query, WebSocket, status
from fastapi.middleware.cors import CORSMiddleware

from ..domain.services import ProgressService
from ..infrastructure.local_progress_repository import LocalProgressRepository
from ..infrastructure.local_session_result_repository import LocalSessionResultRepository
from ..infrastructure.snippet_text_provider import SnippetTextProvider
from .config import settings
from .controller import SpiderTypeController

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Upper bound for level lookups
MAX_TOTAL_XP = 10**12

# Create FastAPI app instance
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize providers (in production, these would be backed by the hosted persistence service)
text_provider = SnippetTextProvider()
progress_repository = LocalProgressRepository()
session_result_repository = LocalSessionResultRepository()
progress_service = ProgressService(
    progress_repository=progress_repository,
    session_result_repository=session_result_repository,
)

# Initialize controller with injected dependencies
controller = SpiderTypeController(
    text_provider=text_provider,
    progress_service=progress_service,
    settings=settings,
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return controller.get_health_status()


@app.get("/languages")
async def get_languages():
    """List the languages that have practice snippets."""
    return {"languages": controller.get_languages()}


@app.get("/achievements")
async def get_achievements():
    """List the achievement catalog."""
    return {"achievements": controller.get_achievements()}


@app.get("/levels/{total_xp}")
async def get_level(total_xp: int = Path(ge=0, le=MAX_TOTAL_XP)):
    """Resolve a cumulative XP amount into level and progress."""
    return controller.get_level(total_xp)


@app.get("/users/{user_id}/stats")
async def get_user_stats(user_id: str):
    """Get dashboard statistics for a user.

    Args:
        user_id: The identifier of the user.

    Returns:
        Totals, averages, streaks, achievements and level for the user.
    """
    try:
        return controller.get_user_stats(user_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error(f"Error getting stats for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@app.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    user_id: Optional[str] = Query(None),
):
    """
    WebSocket endpoint for typing practice runs.

    Connection lifecycle:
    1. Client connects with ?user_id=...
    2. Client sends session.start; server replies session.ready with the target text
    3. Client sends input messages with the full field contents; server replies
       with metrics and, once per second while running, tick messages
    4. When time runs out or the text is complete, server sends session.finished
       (plus a notice if the result could not be saved)
    5. Repeat from 2 to build a combo; send session.close or disconnect to end the run
    """
    if not user_id:
        logger.warning("Missing user_id for WebSocket connection")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()

    try:
        await controller.handle_websocket_connection(websocket=websocket, user_id=user_id)
    except Exception as e:
        logger.error(f"Error handling websocket connection: {e}", exc_info=True)
