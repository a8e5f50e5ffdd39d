"""Row-locked access to the per-user streak singleton."""

from __future__ import annotations

from sqlalchemy import select

from tryluck.core.utils.db import insert_or_ignore
from tryluck.domains.state.models import UserStreak
from tryluck.extensions import db


def lock_streak(user_id: int) -> UserStreak:
    """Return the user's streak row locked FOR UPDATE, creating it (0/0/None) if absent.

    Must run inside the caller's transaction; the lock is held until it ends.
    """
    stmt = (
        select(UserStreak)
        .where(UserStreak.user_id == user_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    streak = db.session.execute(stmt).scalar_one_or_none()
    if streak is None:
        insert_or_ignore(UserStreak(user_id=user_id, current_streak=0, max_streak=0))
        streak = db.session.execute(stmt).scalar_one()
    return streak


def read_streak(user_id: int) -> UserStreak | None:
    return db.session.get(UserStreak, user_id, populate_existing=True)
