"""Level resolver: maps cumulative XP to a level and progress."""

import math

from ..entities.progress import LevelInfo

LEVEL_TITLES = (
    (100, "Typing Legend"),
    (75, "Typing Master"),
    (50, "Speed Demon"),
    (40, "Expert Typist"),
    (30, "Advanced Typist"),
    (20, "Skilled Typist"),
    (10, "Intermediate Typist"),
    (5, "Novice Typist"),
)
DEFAULT_LEVEL_TITLE = "Beginner Typist"


def xp_threshold(level: int) -> int:
    """Cumulative XP needed to leave ``level``."""
    return math.floor(100 * level ** 1.5)


def calculate_level(total_xp: int) -> LevelInfo:
    """Resolve cumulative XP into a level with progress toward the next one.

    The level is seeded from the inverse of the threshold curve and then
    nudged to the exact boundary, so large totals resolve in a few steps.
    """
    level = math.floor((max(0, total_xp) / 100) ** (2 / 3)) + 1
    while level > 1 and total_xp < xp_threshold(level - 1):
        level -= 1
    while total_xp >= xp_threshold(level):
        level += 1

    xp_for_current_level = xp_threshold(level - 1)
    xp_for_next_level = xp_threshold(level)

    xp_into_level = total_xp - xp_for_current_level
    xp_required = xp_for_next_level - xp_for_current_level
    progress = 100 * xp_into_level / xp_required

    return LevelInfo(
        level=level,
        current_xp=total_xp,
        xp_into_level=xp_into_level,
        xp_required_for_level=xp_required,
        xp_for_next_level=xp_for_next_level,
        progress_percent=min(100.0, max(0.0, progress)),
        title=level_title(level),
    )


def level_title(level: int) -> str:
    for threshold, title in LEVEL_TITLES:
        if level >= threshold:
            return title
    return DEFAULT_LEVEL_TITLE
