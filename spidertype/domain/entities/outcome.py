"""Aggregate results handed back to callers after a session is finalized."""

from typing import Optional

from pydantic import BaseModel, Field

from .achievement import Achievement
from .progress import LevelInfo, StreakRecord, XpAward
from .typing_session import SessionResult


class SessionOutcome(BaseModel):
    """Everything a finished session produced: scores, progression and save status."""

    result: SessionResult
    xp_award: XpAward
    level_before: LevelInfo
    level_after: LevelInfo
    streak: Optional[StreakRecord] = None
    new_achievements: list[Achievement] = Field(default_factory=list)
    combo: int = Field(default=0, ge=0)
    result_saved: bool = True
    motivational_message: str = ""

    @property
    def leveled_up(self) -> bool:
        return self.level_after.level > self.level_before.level


class UserStats(BaseModel):
    """Dashboard summary of a user's practice history."""

    total_tests: int = 0
    current_streak: int = 0
    best_streak: int = 0
    tests_today: int = 0
    avg_wpm: int = 0
    avg_accuracy: int = 0
    best_wpm: int = 0
    perfect_accuracy_count: int = 0
    unlocked_achievements: int = 0
    total_achievements: int = 0
    total_xp: int = 0
    level: LevelInfo
