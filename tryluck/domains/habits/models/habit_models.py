"""Habit board models."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from tryluck.extensions import db

INITIAL_COLUMN = "todo"


class Habit(db.Model):
    __tablename__ = "user_habits"
    __table_args__ = (
        db.UniqueConstraint("user_id", "template_id", name="uq_user_habits_user_template"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        db.ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    template_id: Mapped[str] = mapped_column(db.String(50), nullable=False)
    column_status: Mapped[str] = mapped_column(db.String(20), nullable=False, default=INITIAL_COLUMN)
    sort_order: Mapped[int] = mapped_column(nullable=False, default=0)
    date_added: Mapped[date] = mapped_column(nullable=False, default=date.today)
    total_minutes_spent: Mapped[int] = mapped_column(nullable=False, default=0)
    cover_image_url: Mapped[str | None] = mapped_column(db.Text)
    custom_duration_minutes: Mapped[int | None] = mapped_column(nullable=True)
    prophecy_text: Mapped[str | None] = mapped_column(db.Text)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    completions: Mapped[list["HabitCompletion"]] = relationship(
        "HabitCompletion",
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: HabitCompletion.completed_date.desc(),
    )
    log_entries: Mapped[list["HabitLogEntry"]] = relationship(
        "HabitLogEntry",
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: (HabitLogEntry.entry_date.desc(), HabitLogEntry.id.desc()),
    )
    checklist_items: Mapped[list["HabitChecklistItem"]] = relationship(
        "HabitChecklistItem",
        back_populates="habit",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=lambda: (HabitChecklistItem.sort_order, HabitChecklistItem.id),
    )


class HabitCompletion(db.Model):
    __tablename__ = "habit_completions"
    __table_args__ = (
        db.UniqueConstraint("habit_id", "completed_date", name="uq_habit_completions_habit_date"),
        db.Index("ix_habit_completions_user_date", "user_id", "completed_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    habit_id: Mapped[int] = mapped_column(
        db.ForeignKey("user_habits.id", ondelete="CASCADE"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        db.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    completed_date: Mapped[date] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    habit: Mapped[Habit] = relationship("Habit", back_populates="completions")


class HabitLogEntry(db.Model):
    __tablename__ = "habit_log_entries"

    id: Mapped[int] = mapped_column(primary_key=True)
    habit_id: Mapped[int] = mapped_column(
        db.ForeignKey("user_habits.id", ondelete="CASCADE"), index=True, nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        db.ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    entry_date: Mapped[date] = mapped_column(nullable=False)
    text: Mapped[str] = mapped_column(db.Text, nullable=False)
    duration_minutes: Mapped[int | None] = mapped_column(nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    habit: Mapped[Habit] = relationship("Habit", back_populates="log_entries")


class HabitChecklistItem(db.Model):
    __tablename__ = "habit_checklist_items"

    id: Mapped[int] = mapped_column(primary_key=True)
    habit_id: Mapped[int] = mapped_column(
        db.ForeignKey("user_habits.id", ondelete="CASCADE"), index=True, nullable=False
    )
    text: Mapped[str] = mapped_column(db.String(500), nullable=False)
    done: Mapped[bool] = mapped_column(nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(nullable=False, default=0)

    habit: Mapped[Habit] = relationship("Habit", back_populates="checklist_items")


class CustomTemplate(db.Model):
    __tablename__ = "custom_templates"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        db.ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    layer: Mapped[str] = mapped_column(db.String(20), nullable=False, default="biology")
    name: Mapped[str] = mapped_column(db.String(255), nullable=False, default="")
    description: Mapped[str | None] = mapped_column(db.Text)
    science: Mapped[str | None] = mapped_column(db.Text)
    time_of_day: Mapped[str] = mapped_column(db.String(10), nullable=False, default="morning")
    duration_minutes: Mapped[int] = mapped_column(nullable=False, default=10)
    difficulty: Mapped[str] = mapped_column(db.String(10), nullable=False, default="easy")
    tiny_habit_anchor: Mapped[str | None] = mapped_column(db.Text)
    what_you_feel: Mapped[str | None] = mapped_column(db.Text)
    common_mistakes: Mapped[str | None] = mapped_column(db.Text)
    custom_name: Mapped[str | None] = mapped_column(db.String(255))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
