"""Progress service: turns a finished session into XP, streak and achievement state."""

import logging
from datetime import datetime
from typing import Any, Callable, Optional

from ..entities.achievement import AchievementContext, UnlockedAchievement
from ..entities.outcome import SessionOutcome, UserStats
from ..entities.typing_session import SessionResult
from ..interfaces.progress_repository import ProgressRepository
from ..interfaces.session_result_repository import SessionResultRepository
from .achievement_evaluator import ACHIEVEMENTS, achievement_xp, evaluate_achievements
from .level_resolver import calculate_level
from .metrics import round_half_up
from .streak_tracker import advance_streak
from .xp_calculator import calculate_xp, motivational_message

logger = logging.getLogger(__name__)


class ProgressService:
    """
    Finalizes sessions against a user's stored progression.

    Reads the streak record, unlocked achievements and cumulative XP,
    computes the transitions, then hands every record to the repositories.
    Storage failures never propagate: they are logged and reported through
    ``SessionOutcome.result_saved``.
    """

    def __init__(
        self,
        progress_repository: ProgressRepository,
        session_result_repository: SessionResultRepository,
        clock: Callable[[], datetime] = datetime.now,
    ):
        """
        Initialize the service with injected dependencies.

        Args:
            progress_repository: Storage for streaks, achievements and XP
            session_result_repository: Storage for finished session results
            clock: Returns the current local time
        """
        self.progress_repository = progress_repository
        self.session_result_repository = session_result_repository
        self.clock = clock

    def record_session(
        self,
        user_id: str,
        result: SessionResult,
        combo: int = 0,
        metadata: Optional[dict[str, Any]] = None,
    ) -> SessionOutcome:
        """
        Score a finished session and persist the new progression state.

        Args:
            user_id: The user who completed the session.
            result: The frozen session result.
            combo: Sessions finished earlier in the same run.
            metadata: Opaque device/context data passed to storage untouched.

        Returns:
            SessionOutcome: XP award, levels, streak, new achievements and
            whether everything was saved.
        """
        now = self.clock()

        try:
            streak_record = self.progress_repository.get_streak(user_id)
            unlocked_ids = self.progress_repository.get_unlocked_achievement_ids(user_id)
            old_total_xp = self.progress_repository.get_total_xp(user_id)
            previous_results = self.session_result_repository.list_results(user_id)
        except Exception as e:
            logger.error(f"Could not load progress for user {user_id}: {e}", exc_info=True)
            return self._unsaved_outcome(result, combo)

        streak_update = advance_streak(streak_record, now.date())
        streak = streak_update.record

        perfect_count = sum(1 for previous in previous_results if previous.is_perfect)
        if result.is_perfect:
            perfect_count += 1

        new_achievements = evaluate_achievements(
            AchievementContext(
                wpm=result.wpm_net,
                accuracy=result.accuracy_percent,
                consistency=result.consistency_percent,
                streak=streak.current_streak,
                total_tests=streak.total_tests,
                perfect_accuracy_count=perfect_count,
                tests_today=streak.tests_today,
                hour=now.hour,
            ),
            unlocked_ids,
        )

        xp_award = calculate_xp(
            wpm=result.wpm_net,
            accuracy=result.accuracy_percent,
            duration_seconds=result.duration_seconds,
            consistency=result.consistency_percent,
            streak=streak.current_streak,
            combo=combo,
        ).with_achievements(achievement_xp(new_achievements))

        new_total_xp = old_total_xp + xp_award.total
        outcome = SessionOutcome(
            result=result,
            xp_award=xp_award,
            level_before=calculate_level(old_total_xp),
            level_after=calculate_level(new_total_xp),
            streak=streak,
            new_achievements=new_achievements,
            combo=combo,
            motivational_message=motivational_message(xp_award.total),
        )
        if outcome.leveled_up:
            logger.info(
                f"User {user_id} reached level {outcome.level_after.level} "
                f"({outcome.level_after.title})"
            )

        # Result is written last: a stored result always has its streak,
        # achievements and XP applied
        try:
            self.progress_repository.save_streak(user_id, streak)
            for achievement in new_achievements:
                self.progress_repository.append_unlocked_achievement(
                    user_id,
                    UnlockedAchievement(
                        achievement_id=achievement.id,
                        unlocked_at=now,
                        xp_earned=achievement.xp_reward,
                    ),
                )
            self.progress_repository.set_total_xp(user_id, new_total_xp)
            self.session_result_repository.save_result(user_id, result, metadata)
        except Exception as e:
            logger.error(f"Result for user {user_id} not saved: {e}", exc_info=True)
            return outcome.model_copy(update={"result_saved": False})

        logger.info(
            f"Recorded session {result.id} for user {user_id}: +{xp_award.total} XP, "
            f"streak {streak.current_streak}, combo {combo}"
        )
        return outcome

    def _unsaved_outcome(self, result: SessionResult, combo: int) -> SessionOutcome:
        """Score a session without stored context when progress could not be read."""
        xp_award = calculate_xp(
            wpm=result.wpm_net,
            accuracy=result.accuracy_percent,
            duration_seconds=result.duration_seconds,
            consistency=result.consistency_percent,
            combo=combo,
        )
        level = calculate_level(0)
        return SessionOutcome(
            result=result,
            xp_award=xp_award,
            level_before=level,
            level_after=level,
            combo=combo,
            result_saved=False,
            motivational_message=motivational_message(xp_award.total),
        )

    def get_user_stats(self, user_id: str) -> UserStats:
        """
        Summarize a user's practice history for the dashboard.

        Args:
            user_id: The unique identifier of the user.

        Returns:
            UserStats: Totals, averages, streaks, achievements and level.
        """
        results = self.session_result_repository.list_results(user_id)
        streak = self.progress_repository.get_streak(user_id)
        unlocked_ids = self.progress_repository.get_unlocked_achievement_ids(user_id)
        total_xp = self.progress_repository.get_total_xp(user_id)

        total_tests = len(results)
        avg_wpm = round_half_up(sum(r.wpm_net for r in results) / total_tests) if results else 0
        avg_accuracy = round_half_up(sum(r.accuracy_percent for r in results) / total_tests) if results else 0

        tests_today = 0
        if streak is not None and streak.last_test_day == self.clock().date():
            tests_today = streak.tests_today

        return UserStats(
            total_tests=total_tests,
            current_streak=streak.current_streak if streak else 0,
            best_streak=streak.best_streak if streak else 0,
            tests_today=tests_today,
            avg_wpm=avg_wpm,
            avg_accuracy=avg_accuracy,
            best_wpm=max((r.wpm_net for r in results), default=0),
            perfect_accuracy_count=sum(1 for r in results if r.is_perfect),
            unlocked_achievements=len(unlocked_ids),
            total_achievements=len(ACHIEVEMENTS),
            total_xp=total_xp,
            level=calculate_level(total_xp),
        )
