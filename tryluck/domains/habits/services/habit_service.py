"""Habit board services: CRUD, completions, logs, time and ordering."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from tryluck.core.users.services import today_for_user
from tryluck.core.utils.db import insert_or_ignore
from tryluck.domains.habits.models.habit_models import (
    CustomTemplate,
    Habit,
    HabitChecklistItem,
    HabitCompletion,
    HabitLogEntry,
)
from tryluck.extensions import db

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "column_status",
    "sort_order",
    "total_minutes_spent",
    "cover_image_url",
    "custom_duration_minutes",
    "prophecy_text",
)
REQUIRED_FIELDS = {"column_status", "sort_order", "total_minutes_spent"}


def _owned_habit(user_id: int, habit_id: int) -> Optional[Habit]:
    return Habit.query.filter_by(id=habit_id, user_id=user_id).first()


def list_habits(user_id: int) -> List[Habit]:
    return (
        Habit.query.options(
            selectinload(Habit.completions),
            selectinload(Habit.log_entries),
            selectinload(Habit.checklist_items),
        )
        .filter_by(user_id=user_id)
        .order_by(Habit.sort_order, Habit.id)
        .execution_options(populate_existing=True)
        .all()
    )


def add_habit(user_id: int, template_id: str, order: Optional[int] = None) -> Habit:
    template_id = (template_id or "").strip()
    if not template_id:
        raise ValueError("validation_error")
    if Habit.query.filter_by(user_id=user_id, template_id=template_id).first():
        raise ValueError("duplicate")

    habit = Habit(
        user_id=user_id,
        template_id=template_id,
        sort_order=order or 0,
        date_added=today_for_user(user_id),
    )
    db.session.add(habit)
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        raise ValueError("duplicate") from exc
    return habit


def update_habit(user_id: int, habit_id: int, **fields) -> Optional[Habit]:
    habit = _owned_habit(user_id, habit_id)
    if not habit:
        return None
    for key in UPDATABLE_FIELDS:
        if key not in fields:
            continue
        if fields[key] is None and key in REQUIRED_FIELDS:
            continue
        setattr(habit, key, fields[key])
    db.session.commit()
    return habit


def delete_habit(user_id: int, habit_id: int) -> bool:
    habit = _owned_habit(user_id, habit_id)
    if not habit:
        return False
    db.session.delete(habit)
    db.session.commit()
    return True


def complete_habit(user_id: int, habit_id: int, on: Optional[date] = None) -> Optional[bool]:
    """Mark the habit done for a day.

    Returns None when the habit is not the caller's, otherwise whether a new
    row was written. Repeating a completion for the same day is not an error.
    """
    habit = _owned_habit(user_id, habit_id)
    if not habit:
        return None
    completion = HabitCompletion(
        habit_id=habit.id,
        user_id=user_id,
        completed_date=on or today_for_user(user_id),
    )
    created = insert_or_ignore(completion)
    db.session.commit()
    return created


def add_log_entry(
    user_id: int,
    habit_id: int,
    *,
    text: str,
    entry_date: Optional[date] = None,
    duration_minutes: Optional[int] = None,
) -> Optional[HabitLogEntry]:
    habit = _owned_habit(user_id, habit_id)
    if not habit:
        return None
    entry = HabitLogEntry(
        habit_id=habit.id,
        user_id=user_id,
        entry_date=entry_date or today_for_user(user_id),
        text=text,
        duration_minutes=duration_minutes,
    )
    db.session.add(entry)
    if duration_minutes:
        _increment_minutes(habit, duration_minutes)
    db.session.commit()
    return entry


def add_time(user_id: int, habit_id: int, minutes: int) -> bool:
    habit = _owned_habit(user_id, habit_id)
    if not habit:
        return False
    _increment_minutes(habit, minutes)
    db.session.commit()
    return True


def _increment_minutes(habit: Habit, minutes: int) -> None:
    # Evaluated in SQL so concurrent additions cannot lose an update.
    Habit.query.filter_by(id=habit.id).update(
        {Habit.total_minutes_spent: Habit.total_minutes_spent + minutes},
        synchronize_session=False,
    )
    db.session.expire(habit, ["total_minutes_spent"])


def update_checklist(user_id: int, habit_id: int, items: Iterable[dict]) -> bool:
    """Replace the habit's checklist; item ids are not preserved."""
    habit = _owned_habit(user_id, habit_id)
    if not habit:
        return False
    HabitChecklistItem.query.filter_by(habit_id=habit.id).delete()
    for index, item in enumerate(items):
        db.session.add(
            HabitChecklistItem(
                habit_id=habit.id,
                text=item["text"],
                done=bool(item.get("done", False)),
                sort_order=index,
            )
        )
    db.session.commit()
    db.session.expire(habit, ["checklist_items"])
    return True


def reorder_habits(user_id: int, moves: Iterable[dict]) -> int:
    """Apply (id, column, order) moves one habit at a time; unknown ids are ignored."""
    updated = 0
    for move in moves:
        count = Habit.query.filter_by(id=move["id"], user_id=user_id).update(
            {Habit.column_status: move["column"], Habit.sort_order: move["order"]}
        )
        db.session.commit()
        updated += count
    return updated


# --- Custom templates ---


def list_templates(user_id: int) -> List[CustomTemplate]:
    return (
        CustomTemplate.query.filter_by(user_id=user_id)
        .order_by(CustomTemplate.created_at, CustomTemplate.id)
        .all()
    )


def create_template(user_id: int, **fields) -> CustomTemplate:
    template = CustomTemplate(user_id=user_id, **fields)
    db.session.add(template)
    db.session.commit()
    return template


def delete_template(user_id: int, template_id: int) -> bool:
    template = CustomTemplate.query.filter_by(id=template_id, user_id=user_id).first()
    if not template:
        return False
    db.session.delete(template)
    db.session.commit()
    return True
