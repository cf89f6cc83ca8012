"""Progress Repository interface."""

from typing import Optional, Protocol, runtime_checkable

from ..entities.achievement import UnlockedAchievement
from ..entities.progress import StreakRecord


@runtime_checkable
class ProgressRepository(Protocol):
    """Protocol for per-user progression storage.

    Covers the streak record, the unlocked achievement set and cumulative
    XP. Implementations can use any storage backend; the scoring engine
    only decides how these records transition.
    """

    def get_streak(self, user_id: str) -> Optional[StreakRecord]:
        """Retrieve the user's streak record.

        Args:
            user_id: The unique identifier of the user.

        Returns:
            Optional[StreakRecord]: The record, or None before the first
            completed session.
        """
        ...

    def save_streak(self, user_id: str, record: StreakRecord) -> None:
        """Create or replace the user's streak record.

        Args:
            user_id: The unique identifier of the user.
            record: The new streak record.
        """
        ...

    def get_unlocked_achievement_ids(self, user_id: str) -> set[str]:
        """Retrieve the ids of every achievement the user has unlocked.

        Args:
            user_id: The unique identifier of the user.

        Returns:
            set[str]: Unlocked achievement ids (empty for new users).
        """
        ...

    def append_unlocked_achievement(self, user_id: str, unlocked: UnlockedAchievement) -> None:
        """Record a newly unlocked achievement.

        Appending an id the user already holds must be a no-op.

        Args:
            user_id: The unique identifier of the user.
            unlocked: The unlock record.
        """
        ...

    def get_total_xp(self, user_id: str) -> int:
        """Retrieve the user's cumulative XP (0 for new users)."""
        ...

    def set_total_xp(self, user_id: str, total_xp: int) -> None:
        """Overwrite the user's cumulative XP."""
        ...
