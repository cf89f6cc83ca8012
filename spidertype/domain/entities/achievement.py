"""Achievement entities for the SpiderType engine."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Achievement(BaseModel):
    """Static catalog entry. Unlock rules live in the achievement evaluator."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    name: str
    description: str
    xp_reward: int = Field(ge=0)
    icon: str = ""


class UnlockedAchievement(BaseModel):
    """Append-only record of an achievement earned by a user."""

    model_config = ConfigDict(frozen=True)

    achievement_id: str
    unlocked_at: datetime = Field(default_factory=datetime.now)
    xp_earned: int = Field(default=0, ge=0)


class AchievementContext(BaseModel):
    """Session metrics and cumulative counters checked against the catalog."""

    wpm: float = 0
    accuracy: float = 0
    consistency: float = 0
    streak: int = 0
    total_tests: int = 0
    perfect_accuracy_count: int = 0
    tests_today: int = 0
    hour: int = Field(default=12, ge=0, le=23, description="Local wall-clock hour (0-23)")
