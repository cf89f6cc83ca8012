"""Gamification entities: XP awards, levels and streaks."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class XpAward(BaseModel):
    """Breakdown of the XP earned by one finished session.

    ``duration_bonus`` is the only component that can be negative: short
    (15 second) tests carry a 0.5 duration multiplier.
    """

    model_config = ConfigDict(frozen=True)

    base: int = Field(default=0, ge=0)
    wpm_bonus: int = Field(default=0, ge=0)
    accuracy_bonus: int = Field(default=0, ge=0)
    duration_bonus: int = 0
    consistency_bonus: int = Field(default=0, ge=0)
    streak_bonus: int = Field(default=0, ge=0)
    combo_bonus: int = Field(default=0, ge=0)
    achievements_bonus: int = Field(default=0, ge=0)
    multiplier: float = Field(default=1.0, ge=1.0)
    total: int = Field(default=0, ge=0)

    def with_achievements(self, bonus: int) -> "XpAward":
        """Return a copy with achievement XP added on top of the multiplied total."""
        return self.model_copy(
            update={"achievements_bonus": bonus, "total": self.total + bonus}
        )


class LevelInfo(BaseModel):
    """Level and progress derived from cumulative XP."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1)
    current_xp: int
    xp_into_level: int
    xp_required_for_level: int = Field(gt=0)
    xp_for_next_level: int
    progress_percent: float = Field(ge=0, le=100)
    title: str = ""


class StreakRecord(BaseModel):
    """Per-user daily streak counters."""

    current_streak: int = Field(default=0, ge=0)
    best_streak: int = Field(default=0, ge=0)
    last_test_date: date
    last_streak_update_date: date
    last_test_day: date
    tests_today: int = Field(default=0, ge=0)
    total_tests: int = Field(default=0, ge=0)

    class Config:
        """Pydantic model configuration."""

        json_schema_extra = {
            "example": {
                "current_streak": 4,
                "best_streak": 12,
                "last_test_date": "2026-03-02",
                "last_streak_update_date": "2026-03-02",
                "last_test_day": "2026-03-02",
                "tests_today": 3,
                "total_tests": 87,
            }
        }


class StreakUpdate(BaseModel):
    """Outcome of applying one completed session to a streak record."""

    record: StreakRecord
    is_new_streak: bool = False
    streak_broken: bool = False
    previous: Optional[StreakRecord] = None

    @property
    def streak(self) -> int:
        return self.record.current_streak
