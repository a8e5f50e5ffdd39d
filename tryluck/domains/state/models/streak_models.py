"""Daily completion summaries and the per-user streak singleton."""

from __future__ import annotations

from datetime import date

from sqlalchemy.orm import Mapped, mapped_column

from tryluck.extensions import db


class CompletionHistory(db.Model):
    __tablename__ = "completion_history"
    __table_args__ = (
        db.UniqueConstraint("user_id", "record_date", name="uq_completion_history_user_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        db.ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    record_date: Mapped[date] = mapped_column(nullable=False)
    completed_count: Mapped[int] = mapped_column(nullable=False, default=0)


class UserStreak(db.Model):
    __tablename__ = "user_streaks"

    user_id: Mapped[int] = mapped_column(
        db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, autoincrement=False
    )
    current_streak: Mapped[int] = mapped_column(nullable=False, default=0)
    max_streak: Mapped[int] = mapped_column(nullable=False, default=0)
    # Day the last reset ran for; a second reset on the same day is a no-op.
    last_computed: Mapped[date | None] = mapped_column(nullable=True)
