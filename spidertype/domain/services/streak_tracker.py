"""Streak tracker: daily streak transitions for completed sessions."""

import logging
from datetime import date
from typing import Optional

from ..entities.progress import StreakRecord, StreakUpdate

logger = logging.getLogger(__name__)


def advance_streak(record: Optional[StreakRecord], today: date) -> StreakUpdate:
    """Apply one completed session on ``today`` to a user's streak record.

    The streak moves at most once per calendar day. ``last_streak_update_date``
    guards against a second increment when the same day's completion is
    processed again.

    Args:
        record: The stored record, or None before the first session.
        today: Local calendar date of the completion.

    Returns:
        StreakUpdate: The new record plus whether the streak grew or broke.
    """
    if record is None:
        logger.info("Creating first streak record")
        return StreakUpdate(
            record=StreakRecord(
                current_streak=1,
                best_streak=1,
                last_test_date=today,
                last_streak_update_date=today,
                last_test_day=today,
                tests_today=1,
                total_tests=1,
            ),
            is_new_streak=True,
        )

    days_since_last_test = (today - record.last_test_date).days
    already_updated_today = record.last_streak_update_date == today
    tests_today = record.tests_today + 1 if record.last_test_day == today else 1

    current_streak = record.current_streak
    last_test_date = record.last_test_date
    last_streak_update_date = record.last_streak_update_date
    is_new_streak = False
    streak_broken = False

    if days_since_last_test == 1 and not already_updated_today:
        current_streak += 1
        last_test_date = today
        last_streak_update_date = today
        is_new_streak = True
        logger.info(f"Streak extended: {record.current_streak} -> {current_streak}")
    elif days_since_last_test > 1:
        current_streak = 1
        last_test_date = today
        last_streak_update_date = today
        is_new_streak = True
        streak_broken = True
        logger.info(f"Streak broken after {days_since_last_test - 1} missed day(s)")
    elif days_since_last_test < 0:
        logger.warning(
            f"Last test date {record.last_test_date} is after {today}; keeping streak"
        )

    updated = StreakRecord(
        current_streak=current_streak,
        best_streak=max(record.best_streak, current_streak),
        last_test_date=last_test_date,
        last_streak_update_date=last_streak_update_date,
        last_test_day=today,
        tests_today=tests_today,
        total_tests=record.total_tests + 1,
    )
    return StreakUpdate(
        record=updated,
        is_new_streak=is_new_streak,
        streak_broken=streak_broken,
        previous=record,
    )
