"""Achievement catalog and unlock rules."""

import logging
from typing import Iterable, Optional

from ..entities.achievement import Achievement, AchievementContext

logger = logging.getLogger(__name__)

FIRST_TEST = Achievement(id="first_test", name="First Steps", description="Complete your first test", xp_reward=50, icon="🎯")
SPEED_50 = Achievement(id="speed_50", name="Speed Demon", description="Reach 50 WPM", xp_reward=100, icon="⚡")
SPEED_100 = Achievement(id="speed_100", name="Lightning Fast", description="Reach 100 WPM", xp_reward=250, icon="⚡⚡")
SPEED_150 = Achievement(id="speed_150", name="Supersonic", description="Reach 150 WPM", xp_reward=500, icon="🚀")
PERFECT_ACCURACY = Achievement(id="perfect", name="Perfectionist", description="Get 100% accuracy", xp_reward=100, icon="💯")
PERFECT_10 = Achievement(id="perfect_10", name="Flawless Streak", description="Get 100% accuracy 10 times", xp_reward=300, icon="✨")
STREAK_7 = Achievement(id="streak_7", name="Week Warrior", description="7-day streak", xp_reward=200, icon="🔥")
STREAK_30 = Achievement(id="streak_30", name="Month Master", description="30-day streak", xp_reward=1000, icon="🔥🔥")
STREAK_100 = Achievement(id="streak_100", name="Century Champion", description="100-day streak", xp_reward=5000, icon="👑")
TESTS_100 = Achievement(id="tests_100", name="Dedicated Typist", description="Complete 100 tests", xp_reward=500, icon="📈")
TESTS_500 = Achievement(id="tests_500", name="Typing Veteran", description="Complete 500 tests", xp_reward=2000, icon="🏆")
TESTS_1000 = Achievement(id="tests_1000", name="Typing Legend", description="Complete 1000 tests", xp_reward=5000, icon="👑")
NIGHT_OWL = Achievement(id="night_owl", name="Night Owl", description="Complete a test after midnight", xp_reward=50, icon="🦉")
EARLY_BIRD = Achievement(id="early_bird", name="Early Bird", description="Complete a test before 6 AM", xp_reward=50, icon="🐦")
MARATHON = Achievement(id="marathon", name="Marathon Runner", description="Complete 10 tests in one day", xp_reward=300, icon="🏃")
CONSISTENCY_KING = Achievement(id="consistency", name="Consistency King", description="Achieve 95%+ consistency", xp_reward=150, icon="📊")

ACHIEVEMENTS: dict[str, Achievement] = {
    achievement.id: achievement
    for achievement in (
        FIRST_TEST,
        SPEED_50,
        SPEED_100,
        SPEED_150,
        PERFECT_ACCURACY,
        PERFECT_10,
        STREAK_7,
        STREAK_30,
        STREAK_100,
        TESTS_100,
        TESTS_500,
        TESTS_1000,
        NIGHT_OWL,
        EARLY_BIRD,
        MARATHON,
        CONSISTENCY_KING,
    )
}

# Tiered categories, highest tier first; only one tier fires per evaluation
SPEED_TIERS = ((150, SPEED_150), (100, SPEED_100), (50, SPEED_50))
STREAK_TIERS = ((100, STREAK_100), (30, STREAK_30), (7, STREAK_7))
VOLUME_TIERS = ((1000, TESTS_1000), (500, TESTS_500), (100, TESTS_100))


def _highest_tier(value: float, tiers) -> Optional[Achievement]:
    for threshold, achievement in tiers:
        if value >= threshold:
            return achievement
    return None


def evaluate_achievements(context: AchievementContext, unlocked_ids: Iterable[str]) -> list[Achievement]:
    """Determine which achievements a finished session newly unlocks.

    Early bird (before 6 AM) and night owl (10 PM to 2 AM) are checked
    independently, so a session between midnight and 2 AM earns both.

    Args:
        context: Session metrics and cumulative counters.
        unlocked_ids: Ids the user already holds; these are never returned.

    Returns:
        list[Achievement]: Newly unlocked achievements in rule order.
    """
    candidates: list[Optional[Achievement]] = []

    if context.total_tests == 1:
        candidates.append(FIRST_TEST)

    candidates.append(_highest_tier(context.wpm, SPEED_TIERS))

    if context.accuracy >= 100:
        candidates.append(PERFECT_ACCURACY)
        if context.perfect_accuracy_count >= 10:
            candidates.append(PERFECT_10)

    candidates.append(_highest_tier(context.streak, STREAK_TIERS))
    candidates.append(_highest_tier(context.total_tests, VOLUME_TIERS))

    if 0 <= context.hour < 6:
        candidates.append(EARLY_BIRD)
    if context.hour >= 22 or context.hour < 2:
        candidates.append(NIGHT_OWL)

    if context.consistency >= 95:
        candidates.append(CONSISTENCY_KING)

    if context.tests_today >= 10:
        candidates.append(MARATHON)

    seen = set(unlocked_ids)
    newly_unlocked = []
    for achievement in candidates:
        if achievement is None or achievement.id in seen:
            continue
        seen.add(achievement.id)
        newly_unlocked.append(achievement)

    if newly_unlocked:
        logger.info(f"Unlocked achievements: {[a.id for a in newly_unlocked]}")
    return newly_unlocked


def achievement_xp(achievements: Iterable[Achievement]) -> int:
    """Sum the XP rewards of a set of achievements."""
    return sum(achievement.xp_reward for achievement in achievements)
