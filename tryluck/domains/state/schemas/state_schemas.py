"""Snapshot item shapes accepted by the full-replace import.

Snapshots are client-authored: the server's own field names and the
client's local names are both accepted so an exported snapshot re-imports
unchanged. Integers are bounded to what the columns can store, so an
oversized value is reported against its item instead of failing the insert.
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import AliasChoices, Field

from tryluck.core.utils.serialization import INT_MAX, LenientDay, LenientModel


class HabitImport(LenientModel):
    template_id: str = Field(min_length=1, max_length=50)
    column_status: str = Field(
        default="todo",
        max_length=20,
        validation_alias=AliasChoices("column", "columnStatus", "column_status"),
    )
    sort_order: int = Field(
        default=0,
        ge=-INT_MAX - 1,
        le=INT_MAX,
        validation_alias=AliasChoices("order", "sortOrder", "sort_order"),
    )
    date_added: LenientDay = None
    total_minutes_spent: int = Field(default=0, ge=0, le=INT_MAX)
    cover_image_url: Optional[str] = None
    custom_duration_minutes: Optional[int] = Field(default=None, ge=0, le=INT_MAX)
    prophecy_text: Optional[str] = None
    completion_dates: List[Any] = Field(default_factory=list)
    log_entries: List[Any] = Field(default_factory=list)
    checklist: List[Any] = Field(default_factory=list)


class LogEntryImport(LenientModel):
    entry_date: LenientDay = Field(
        default=None, validation_alias=AliasChoices("date", "entryDate", "entry_date")
    )
    text: str = ""
    duration_minutes: Optional[int] = Field(default=None, ge=0, le=INT_MAX)


class ChecklistItemImport(LenientModel):
    text: str = Field(min_length=1, max_length=500)
    done: bool = False


class CustomTemplateImport(LenientModel):
    layer: str = Field(default="biology", max_length=20)
    name: str = Field(default="", max_length=255)
    description: Optional[str] = None
    science: Optional[str] = None
    time_of_day: str = Field(default="morning", max_length=10)
    duration_minutes: int = Field(default=10, ge=0, le=INT_MAX)
    difficulty: str = Field(default="easy", max_length=10)
    tiny_habit_anchor: Optional[str] = None
    what_you_feel: Optional[str] = None
    common_mistakes: Optional[str] = None
    custom_name: Optional[str] = Field(default=None, max_length=255)
