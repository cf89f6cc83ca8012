"""Local in-memory implementation of Session Result Repository."""

from typing import Any, Dict, Optional

from ..domain.entities.typing_session import SessionResult
from ..domain.interfaces.session_result_repository import SessionResultRepository


class LocalSessionResultRepository(SessionResultRepository):
    """Local in-memory implementation of the Session Result Repository.

    Stores results per user in a dictionary for testing and development
    purposes.
    """

    def __init__(self):
        """Initialize the local result repository with an empty dictionary."""
        self._results: Dict[str, list[SessionResult]] = {}
        self._metadata: Dict[str, dict[str, Any]] = {}

    def save_result(
        self,
        user_id: str,
        result: SessionResult,
        metadata: Optional[dict[str, Any]] = None,
    ) -> None:
        """Append a result to the user's history.

        Args:
            user_id: The unique identifier of the user.
            result: The session result to save.
            metadata: Opaque context stored alongside the result.
        """
        self._results.setdefault(user_id, []).append(result)
        self._metadata[str(result.id)] = dict(metadata or {})

    def list_results(self, user_id: str) -> list[SessionResult]:
        """List the user's results, oldest first."""
        return list(self._results.get(user_id, []))

    def get_metadata(self, result_id: str) -> dict[str, Any]:
        """Get the metadata saved with a result.

        Raises:
            ValueError: If the result is not found.
        """
        if result_id not in self._metadata:
            raise ValueError(f"Result with id {result_id} not found")

        return self._metadata[result_id]

    def clear(self) -> None:
        """Clear all results."""
        self._results.clear()
        self._metadata.clear()
