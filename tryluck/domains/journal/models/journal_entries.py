"""The six journal kinds, one table each."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column

from tryluck.extensions import db


class JournalEntryMixin:
    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        db.ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    entry_date: Mapped[date] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)


class LuckEntry(JournalEntryMixin, db.Model):
    __tablename__ = "luck_entries"

    event1: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    event2: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    event3: Mapped[str] = mapped_column(db.Text, nullable=False, default="")


class GratitudeEntry(JournalEntryMixin, db.Model):
    __tablename__ = "gratitude_entries"

    item1: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    item2: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    item3: Mapped[str] = mapped_column(db.Text, nullable=False, default="")


class DecisionEntry(JournalEntryMixin, db.Model):
    __tablename__ = "decision_entries"

    decision: Mapped[str] = mapped_column(db.Text, nullable=False)
    logic: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    expectation: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    emotional_state: Mapped[str] = mapped_column(db.Text, nullable=False, default="")


class WoopEntry(JournalEntryMixin, db.Model):
    __tablename__ = "woop_entries"

    wish: Mapped[str] = mapped_column(db.Text, nullable=False)
    outcome: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    obstacle: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    plan: Mapped[str] = mapped_column(db.Text, nullable=False, default="")


class ProphecyEntry(JournalEntryMixin, db.Model):
    __tablename__ = "prophecy_entries"

    prophecy: Mapped[str] = mapped_column(db.Text, nullable=False)
    reasoning: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    steps: Mapped[str] = mapped_column(db.Text, nullable=False, default="")


class BeliefEntry(JournalEntryMixin, db.Model):
    __tablename__ = "belief_entries"

    belief: Mapped[str] = mapped_column(db.Text, nullable=False)
    origin: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    impact: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    belief_type: Mapped[str] = mapped_column(db.String(10), nullable=False, default="empowering")
