"""Unit tests for achievement evaluation."""

import pytest

from spidertype.domain.entities import AchievementContext
from spidertype.domain.services.achievement_evaluator import (
    ACHIEVEMENTS,
    achievement_xp,
    evaluate_achievements,
)


def ids(achievements) -> list[str]:
    return [achievement.id for achievement in achievements]


class TestCatalog:
    """Tests for the static achievement catalog."""

    def test_catalog_size(self):
        assert len(ACHIEVEMENTS) == 16

    def test_catalog_keys_match_ids(self):
        for key, achievement in ACHIEVEMENTS.items():
            assert key == achievement.id
            assert achievement.xp_reward > 0


class TestEvaluateAchievements:
    """Tests for unlock rules."""

    def test_first_test(self):
        unlocked = evaluate_achievements(AchievementContext(total_tests=1), set())

        assert ids(unlocked) == ["first_test"]

    @pytest.mark.parametrize(
        "wpm,expected",
        [(49, []), (50, ["speed_50"]), (100, ["speed_100"]), (160, ["speed_150"])],
    )
    def test_only_highest_speed_tier_fires(self, wpm, expected):
        unlocked = evaluate_achievements(AchievementContext(wpm=wpm, total_tests=2), set())

        assert ids(unlocked) == expected

    def test_perfect_accuracy_tiers(self):
        """Test that perfect_10 needs ten perfect sessions including this one."""
        nine = evaluate_achievements(AchievementContext(accuracy=100, perfect_accuracy_count=9, total_tests=9), set())
        ten = evaluate_achievements(AchievementContext(accuracy=100, perfect_accuracy_count=10, total_tests=10), set())

        assert ids(nine) == ["perfect"]
        assert ids(ten) == ["perfect", "perfect_10"]

    def test_streak_tier(self):
        unlocked = evaluate_achievements(AchievementContext(streak=30, total_tests=40), set())

        assert ids(unlocked) == ["streak_30"]

    def test_volume_tier(self):
        unlocked = evaluate_achievements(AchievementContext(total_tests=500), set())

        assert ids(unlocked) == ["tests_500"]

    @pytest.mark.parametrize(
        "hour,expected",
        [
            (1, ["early_bird", "night_owl"]),
            (5, ["early_bird"]),
            (6, []),
            (12, []),
            (22, ["night_owl"]),
            (23, ["night_owl"]),
        ],
    )
    def test_time_of_day(self, hour, expected):
        """Test early bird and night owl, which overlap after midnight."""
        unlocked = evaluate_achievements(AchievementContext(hour=hour, total_tests=2), set())

        assert ids(unlocked) == expected

    def test_consistency_and_marathon(self):
        unlocked = evaluate_achievements(
            AchievementContext(consistency=95, tests_today=10, total_tests=12), set()
        )

        assert ids(unlocked) == ["consistency", "marathon"]

    def test_already_unlocked_are_not_returned(self):
        context = AchievementContext(wpm=60, accuracy=100, perfect_accuracy_count=1, total_tests=1)

        unlocked = evaluate_achievements(context, {"first_test", "perfect"})

        assert ids(unlocked) == ["speed_50"]

    def test_reevaluation_is_idempotent(self):
        """Test that a second pass over the same context unlocks nothing new."""
        context = AchievementContext(
            wpm=120, accuracy=100, consistency=97, streak=7, total_tests=1,
            perfect_accuracy_count=1, tests_today=1, hour=3,
        )
        first = evaluate_achievements(context, set())
        second = evaluate_achievements(context, set(ids(first)))

        assert len(first) == 6
        assert second == []


def test_achievement_xp_sums_rewards():
    achievements = [ACHIEVEMENTS["first_test"], ACHIEVEMENTS["perfect"], ACHIEVEMENTS["speed_50"]]

    assert achievement_xp(achievements) == 250
    assert achievement_xp([]) == 0
