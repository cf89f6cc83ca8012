"""Local in-memory implementation of ProgressRepository."""

from typing import Dict, Optional

from ..domain.entities.achievement import UnlockedAchievement
from ..domain.entities.progress import StreakRecord
from ..domain.interfaces.progress_repository import ProgressRepository


class LocalProgressRepository(ProgressRepository):
    """Local in-memory implementation of the ProgressRepository protocol.

    Stores streaks, unlocked achievements and XP totals in dictionaries
    for testing and development purposes.
    """

    def __init__(self):
        """Initialize the repository with empty stores."""
        self._streaks: Dict[str, StreakRecord] = {}
        self._achievements: Dict[str, list[UnlockedAchievement]] = {}
        self._total_xp: Dict[str, int] = {}

    def get_streak(self, user_id: str) -> Optional[StreakRecord]:
        """Retrieve the user's streak record, or None for new users."""
        return self._streaks.get(user_id)

    def save_streak(self, user_id: str, record: StreakRecord) -> None:
        """Create or replace the user's streak record."""
        self._streaks[user_id] = record

    def get_unlocked_achievement_ids(self, user_id: str) -> set[str]:
        """Retrieve the ids of the user's unlocked achievements."""
        return {unlocked.achievement_id for unlocked in self._achievements.get(user_id, [])}

    def append_unlocked_achievement(self, user_id: str, unlocked: UnlockedAchievement) -> None:
        """Append an unlock record; ids the user already holds are ignored."""
        if unlocked.achievement_id in self.get_unlocked_achievement_ids(user_id):
            return
        self._achievements.setdefault(user_id, []).append(unlocked)

    def get_unlocked_achievements(self, user_id: str) -> list[UnlockedAchievement]:
        """Get the user's unlock records in the order they were earned.

        Returns:
            list[UnlockedAchievement]: Copy of the user's unlock records.
        """
        return list(self._achievements.get(user_id, []))

    def get_total_xp(self, user_id: str) -> int:
        """Retrieve the user's cumulative XP."""
        return self._total_xp.get(user_id, 0)

    def set_total_xp(self, user_id: str, total_xp: int) -> None:
        """Overwrite the user's cumulative XP."""
        self._total_xp[user_id] = total_xp

    def clear(self) -> None:
        """Clear all stored progress."""
        self._streaks.clear()
        self._achievements.clear()
        self._total_xp.clear()
