"""Habit DTOs and schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from tryluck.core.utils.serialization import INT_MAX, CamelModel


class HabitCreate(CamelModel):
    template_id: str = Field(min_length=1, max_length=50)
    order: Optional[int] = Field(default=None, ge=-INT_MAX - 1, le=INT_MAX)


class HabitUpdate(CamelModel):
    column_status: Optional[str] = Field(default=None, min_length=1, max_length=20)
    sort_order: Optional[int] = Field(default=None, ge=-INT_MAX - 1, le=INT_MAX)
    total_minutes_spent: Optional[int] = Field(default=None, ge=0, le=INT_MAX)
    cover_image_url: Optional[str] = None
    custom_duration_minutes: Optional[int] = Field(default=None, ge=0, le=INT_MAX)
    prophecy_text: Optional[str] = None


class CompleteRequest(CamelModel):
    completed_date: Optional[date] = Field(default=None, alias="date")


class LogEntryCreate(CamelModel):
    text: str = Field(min_length=1)
    entry_date: Optional[date] = Field(default=None, alias="date")
    duration_minutes: Optional[int] = Field(default=None, ge=0, le=INT_MAX)


class AddTimeRequest(CamelModel):
    minutes: int = Field(gt=0, le=INT_MAX)


class ChecklistItemIn(CamelModel):
    text: str = Field(min_length=1, max_length=500)
    done: bool = False


class ChecklistUpdate(CamelModel):
    items: List[ChecklistItemIn]


class ReorderItem(CamelModel):
    id: int
    column: str = Field(min_length=1, max_length=20)
    order: int = Field(ge=-INT_MAX - 1, le=INT_MAX)


class ReorderRequest(CamelModel):
    habits: List[ReorderItem]


class LogEntryResponse(CamelModel):
    id: int
    entry_date: date = Field(alias="date")
    text: str
    duration_minutes: Optional[int] = None


class ChecklistItemResponse(CamelModel):
    id: int
    text: str
    done: bool


class HabitResponse(CamelModel):
    id: int
    user_id: int
    template_id: str
    column_status: str
    sort_order: int
    date_added: date
    total_minutes_spent: int
    cover_image_url: Optional[str] = None
    custom_duration_minutes: Optional[int] = None
    prophecy_text: Optional[str] = None
    created_at: Optional[datetime] = None
    completion_dates: List[date] = []
    log_entries: List[LogEntryResponse] = []
    checklist: List[ChecklistItemResponse] = []


class CustomTemplateCreate(CamelModel):
    layer: str = Field(default="biology", min_length=1, max_length=20)
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    science: Optional[str] = None
    time_of_day: str = Field(default="morning", max_length=10)
    duration_minutes: int = Field(default=10, ge=0, le=INT_MAX)
    difficulty: str = Field(default="easy", max_length=10)
    tiny_habit_anchor: Optional[str] = None
    what_you_feel: Optional[str] = None
    common_mistakes: Optional[str] = None
    custom_name: Optional[str] = Field(default=None, max_length=255)


class CustomTemplateResponse(CamelModel):
    id: int
    layer: str
    name: str
    description: Optional[str] = None
    science: Optional[str] = None
    time_of_day: str
    duration_minutes: int
    difficulty: str
    tiny_habit_anchor: Optional[str] = None
    what_you_feel: Optional[str] = None
    common_mistakes: Optional[str] = None
    custom_name: Optional[str] = None
    created_at: Optional[datetime] = None


def serialize_habit(habit) -> dict:
    """Habit row plus its completion dates, log entries and checklist."""
    response = HabitResponse(
        id=habit.id,
        user_id=habit.user_id,
        template_id=habit.template_id,
        column_status=habit.column_status,
        sort_order=habit.sort_order,
        date_added=habit.date_added,
        total_minutes_spent=habit.total_minutes_spent,
        cover_image_url=habit.cover_image_url,
        custom_duration_minutes=habit.custom_duration_minutes,
        prophecy_text=habit.prophecy_text,
        created_at=habit.created_at,
        completion_dates=[c.completed_date for c in habit.completions],
        log_entries=[LogEntryResponse.model_validate(entry) for entry in habit.log_entries],
        checklist=[ChecklistItemResponse.model_validate(item) for item in habit.checklist_items],
    )
    return response.to_json()


def serialize_template(template) -> dict:
    return CustomTemplateResponse.model_validate(template).to_json()
