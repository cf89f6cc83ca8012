"""XP calculator: turns a finished session into an XP award breakdown."""

import math

from ..entities.progress import XpAward

BASE_XP_PER_TEST = 10
WPM_MULTIPLIER = 0.5
ACCURACY_BONUS_THRESHOLD = 95
ACCURACY_BONUS = 20
PERFECT_ACCURACY_BONUS = 50
DURATION_MULTIPLIERS = {
    15: 0.5,
    30: 1.0,
    60: 1.5,
    120: 2.0,
}
CONSISTENCY_BONUS_THRESHOLD = 80
CONSISTENCY_BONUS = 15

# Checked highest first
STREAK_MULTIPLIERS = (
    (100, 3.0),
    (30, 2.0),
    (14, 1.5),
    (7, 1.25),
    (3, 1.1),
)

COMBO_MULTIPLIER = 0.05

MOTIVATIONAL_MESSAGES = (
    (150, "Outstanding performance! Keep it up!"),
    (100, "Excellent work! You're on fire!"),
    (75, "Great job! You're improving fast!"),
    (50, "Nice work! Keep practicing!"),
    (25, "Good effort! You're making progress!"),
)
DEFAULT_MOTIVATIONAL_MESSAGE = "Keep going! Every test makes you better!"


def duration_multiplier(duration_seconds: int) -> float:
    """Multiplier for a test length; unknown durations fall back to 1.0."""
    return DURATION_MULTIPLIERS.get(duration_seconds, 1.0)


def streak_multiplier(streak: int) -> float:
    for threshold, multiplier in STREAK_MULTIPLIERS:
        if streak >= threshold:
            return multiplier
    return 1.0


def combo_multiplier(combo: int) -> float:
    return 1 + max(0, combo) * COMBO_MULTIPLIER


def calculate_xp(
    wpm: float,
    accuracy: float,
    duration_seconds: int,
    consistency: float,
    streak: int = 0,
    combo: int = 0,
) -> XpAward:
    """Calculate the XP earned from a typing test.

    Bonuses are summed first, then scaled by the streak and combo
    multipliers. Achievement rewards are added afterwards through
    ``XpAward.with_achievements`` and are never multiplied.

    Args:
        wpm: Net words per minute of the session.
        accuracy: Accuracy percentage (0-100).
        duration_seconds: Test length; one of 15, 30, 60 or 120.
        consistency: Consistency percentage (0-100).
        streak: Current daily streak including today.
        combo: Sessions finished earlier in the same run, before this one.

    Returns:
        XpAward: Per-component breakdown and the multiplied total.
    """
    base = BASE_XP_PER_TEST
    wpm_bonus = math.floor(max(0, wpm) * WPM_MULTIPLIER)

    accuracy_bonus = 0
    if accuracy >= 100:
        accuracy_bonus = PERFECT_ACCURACY_BONUS
    elif accuracy >= ACCURACY_BONUS_THRESHOLD:
        accuracy_bonus = ACCURACY_BONUS

    duration_bonus = math.floor((base + wpm_bonus) * (duration_multiplier(duration_seconds) - 1))

    consistency_bonus = CONSISTENCY_BONUS if consistency >= CONSISTENCY_BONUS_THRESHOLD else 0

    pre_multiplier_total = base + wpm_bonus + accuracy_bonus + duration_bonus + consistency_bonus

    streak_mult = streak_multiplier(streak)
    streak_bonus = math.floor(pre_multiplier_total * (streak_mult - 1))

    combo_mult = combo_multiplier(combo)
    combo_bonus = math.floor(pre_multiplier_total * (combo_mult - 1))

    multiplier = streak_mult * combo_mult

    return XpAward(
        base=base,
        wpm_bonus=wpm_bonus,
        accuracy_bonus=accuracy_bonus,
        duration_bonus=duration_bonus,
        consistency_bonus=consistency_bonus,
        streak_bonus=streak_bonus,
        combo_bonus=combo_bonus,
        multiplier=multiplier,
        total=math.floor(pre_multiplier_total * multiplier),
    )


def motivational_message(xp_earned: int) -> str:
    for threshold, message in MOTIVATIONAL_MESSAGES:
        if xp_earned >= threshold:
            return message
    return DEFAULT_MOTIVATIONAL_MESSAGE
