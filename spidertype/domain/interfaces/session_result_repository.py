"""Session Result Repository interface."""

from typing import Any, Optional, Protocol, runtime_checkable

from ..entities.typing_session import SessionResult


@runtime_checkable
class SessionResultRepository(Protocol):
    """Protocol defining the interface for finished-session storage.

    Results are handed off wholesale once a session finishes; the engine
    keeps no reference to them afterwards.
    """

    def save_result(
        self,
        user_id: str,
        result: SessionResult,
        metadata: Optional[dict[str, Any]] = None,
    ) -> None:
        """Save a finished session result.

        Args:
            user_id: The unique identifier of the user.
            result: The immutable session result.
            metadata: Opaque device/context data stored alongside the result.
        """
        ...

    def list_results(self, user_id: str) -> list[SessionResult]:
        """List every stored result for a user, oldest first.

        Args:
            user_id: The unique identifier of the user.

        Returns:
            list[SessionResult]: The user's results (empty if none).
        """
        ...
