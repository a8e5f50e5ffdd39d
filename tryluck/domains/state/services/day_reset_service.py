"""Once-per-day streak evaluation and board reset."""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from tryluck.core.users.services import today_for_user
from tryluck.core.utils.dates import date_offset
from tryluck.core.utils.db import insert_or_ignore
from tryluck.core.utils.locks import user_locks
from tryluck.domains.habits.models.habit_models import INITIAL_COLUMN, Habit, HabitCompletion
from tryluck.domains.state.models import CompletionHistory
from tryluck.domains.state.services.streaks import lock_streak
from tryluck.extensions import db

logger = logging.getLogger(__name__)

ALREADY_RESET = "already reset"


def meets_threshold(done_count: int, total_habits: int) -> bool:
    """At least half of the habits done; no habits never qualifies."""
    return total_habits > 0 and done_count * 2 >= total_habits


def perform_day_reset(user_id: int, today: Optional[date] = None) -> dict:
    """Evaluate yesterday, advance or break the streak, and clear the board.

    ``today`` defaults to the user's local calendar date and is the idempotence
    key: a second call on the same day returns the stored values untouched.
    The whole sequence commits once; any failure rolls it back.
    """
    with user_locks.hold(user_id):
        try:
            streak = lock_streak(user_id)
            today = today or today_for_user(user_id)
            if streak.last_computed == today:
                db.session.commit()
                return {
                    "message": ALREADY_RESET,
                    "streak": streak.current_streak,
                    "maxStreak": streak.max_streak,
                }

            yesterday = date_offset(today, -1)
            total_habits = Habit.query.filter_by(user_id=user_id).count()
            done_count = HabitCompletion.query.filter_by(
                user_id=user_id, completed_date=yesterday
            ).count()

            # Written once per day; an existing row for yesterday is left as it is.
            insert_or_ignore(
                CompletionHistory(
                    user_id=user_id, record_date=yesterday, completed_count=done_count
                )
            )

            if meets_threshold(done_count, total_habits):
                streak.current_streak += 1
                streak.max_streak = max(streak.max_streak, streak.current_streak)
            else:
                streak.current_streak = 0

            Habit.query.filter_by(user_id=user_id).update(
                {Habit.column_status: INITIAL_COLUMN, Habit.sort_order: 0}
            )
            streak.last_computed = today
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    logger.info(
        "Day reset for user %s on %s: %s/%s done, streak %s (max %s)",
        user_id,
        today,
        done_count,
        total_habits,
        streak.current_streak,
        streak.max_streak,
    )
    return {"streak": streak.current_streak, "maxStreak": streak.max_streak}
