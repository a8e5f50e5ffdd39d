"""Onboarding survey answers, one row per user."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from tryluck.extensions import db


class Onboarding(db.Model):
    __tablename__ = "onboarding"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        db.ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    main_pain: Mapped[str | None] = mapped_column(db.String(20))
    desired_outcome: Mapped[str | None] = mapped_column(db.Text)
    priority_areas: Mapped[list | None] = mapped_column(db.JSON)
    daily_minutes: Mapped[int | None] = mapped_column(nullable=True)
    wake_time: Mapped[str | None] = mapped_column(db.String(10))
    tracker_experience: Mapped[str | None] = mapped_column(db.String(20))
    onboarding_completed: Mapped[bool] = mapped_column(nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
