"""Full-replace import of a client snapshot.

All of the user's mutable data is deleted and rebuilt from the snapshot.
Each item is inserted inside its own savepoint, so a malformed or
conflicting item is recorded in the report and skipped while the rest of
the snapshot still lands. Connection failures abort and roll back.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import DataError, IntegrityError

from tryluck.core.users.services import today_for_user
from tryluck.core.utils.dates import parse_day
from tryluck.core.utils.locks import user_locks
from tryluck.core.utils.serialization import INT_MAX
from tryluck.domains.habits.models.habit_models import (
    CustomTemplate,
    Habit,
    HabitChecklistItem,
    HabitCompletion,
    HabitLogEntry,
)
from tryluck.domains.journal.registry import JOURNAL_KINDS
from tryluck.domains.state.models import CompletionHistory, UserStreak
from tryluck.domains.state.schemas.state_schemas import (
    ChecklistItemImport,
    CustomTemplateImport,
    HabitImport,
    LogEntryImport,
)
from tryluck.domains.state.services.streaks import lock_streak
from tryluck.extensions import db

logger = logging.getLogger(__name__)

STREAK_FIELDS = (("streak", "current_streak"), ("maxStreak", "max_streak"))


class ImportReport:
    """Counts of imported rows per section and the items that were skipped."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        self.imported: Counter = Counter()
        self.skipped: List[dict] = []

    def added(self, section: str) -> None:
        self.imported[section] += 1

    def skip(self, section: str, index: Any, reason: str) -> None:
        logger.warning(
            "Import for user %s skipped %s[%s]: %s", self.user_id, section, index, reason
        )
        self.skipped.append({"section": section, "index": index, "reason": reason})

    def to_dict(self) -> dict:
        return {"imported": dict(self.imported), "skipped": list(self.skipped)}


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        first = exc.errors(include_url=False)[0]
        where = ".".join(str(part) for part in first.get("loc", ())) or "item"
        return f"invalid {where}: {first.get('msg')}"
    if isinstance(exc, IntegrityError):
        return "conflicts with existing data"
    if isinstance(exc, DataError):
        return "value rejected by the database"
    return exc.__class__.__name__


def _insert(report: ImportReport, section: str, index: Any, instance) -> bool:
    try:
        with db.session.begin_nested():
            db.session.add(instance)
    except (IntegrityError, DataError) as exc:
        report.skip(section, index, _describe(exc))
        return False
    report.added(section)
    return True


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= INT_MAX


def _section(snapshot: Mapping, key: str, report: ImportReport) -> List[Any]:
    value = snapshot.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        report.skip(key, None, "expected a list")
        return []
    return value


def _wipe(user_id: int) -> None:
    owned_habits = select(Habit.id).where(Habit.user_id == user_id)
    HabitChecklistItem.query.filter(HabitChecklistItem.habit_id.in_(owned_habits)).delete(
        synchronize_session="fetch"
    )
    HabitCompletion.query.filter_by(user_id=user_id).delete()
    HabitLogEntry.query.filter_by(user_id=user_id).delete()
    Habit.query.filter_by(user_id=user_id).delete()
    for kind in JOURNAL_KINDS.values():
        kind.model.query.filter_by(user_id=user_id).delete()
    CompletionHistory.query.filter_by(user_id=user_id).delete()
    CustomTemplate.query.filter_by(user_id=user_id).delete()


def _import_habits(user_id: int, items: List[Any], today: date, report: ImportReport) -> None:
    for index, raw in enumerate(items):
        try:
            item = HabitImport.model_validate(raw)
        except ValidationError as exc:
            report.skip("habits", index, _describe(exc))
            continue
        habit = Habit(
            user_id=user_id,
            template_id=item.template_id,
            column_status=item.column_status,
            sort_order=item.sort_order,
            date_added=item.date_added or today,
            total_minutes_spent=item.total_minutes_spent,
            cover_image_url=item.cover_image_url,
            custom_duration_minutes=item.custom_duration_minutes,
            prophecy_text=item.prophecy_text,
        )
        if not _insert(report, "habits", index, habit):
            continue
        prefix = f"habits[{index}]"
        _import_completions(user_id, habit, item.completion_dates, prefix, report)
        _import_log_entries(user_id, habit, item.log_entries, today, prefix, report)
        _import_checklist(habit, item.checklist, prefix, report)


def _import_completions(
    user_id: int, habit: Habit, raw_dates: List[Any], prefix: str, report: ImportReport
) -> None:
    seen = set()
    for index, raw in enumerate(raw_dates):
        day = parse_day(raw)
        if day is None:
            report.skip(f"{prefix}.completionDates", index, "not a calendar date")
            continue
        if day in seen:
            continue
        seen.add(day)
        completion = HabitCompletion(habit_id=habit.id, user_id=user_id, completed_date=day)
        _insert(report, "completions", index, completion)


def _import_log_entries(
    user_id: int,
    habit: Habit,
    entries: List[Any],
    today: date,
    prefix: str,
    report: ImportReport,
) -> None:
    for index, raw in enumerate(entries):
        try:
            entry = LogEntryImport.model_validate(raw)
        except ValidationError as exc:
            report.skip(f"{prefix}.logEntries", index, _describe(exc))
            continue
        _insert(
            report,
            "logEntries",
            index,
            HabitLogEntry(
                habit_id=habit.id,
                user_id=user_id,
                entry_date=entry.entry_date or today,
                text=entry.text,
                duration_minutes=entry.duration_minutes,
            ),
        )


def _import_checklist(habit: Habit, items: List[Any], prefix: str, report: ImportReport) -> None:
    for index, raw in enumerate(items):
        try:
            item = ChecklistItemImport.model_validate(raw)
        except ValidationError as exc:
            report.skip(f"{prefix}.checklist", index, _describe(exc))
            continue
        _insert(
            report,
            "checklist",
            index,
            HabitChecklistItem(habit_id=habit.id, text=item.text, done=item.done, sort_order=index),
        )


def _import_journals(user_id: int, snapshot: Mapping, today: date, report: ImportReport) -> None:
    for kind in JOURNAL_KINDS.values():
        for index, raw in enumerate(_section(snapshot, kind.snapshot_key, report)):
            try:
                item = kind.import_schema.model_validate(raw)
            except ValidationError as exc:
                report.skip(kind.snapshot_key, index, _describe(exc))
                continue
            fields = item.model_dump()
            fields["entry_date"] = fields.get("entry_date") or today
            _insert(report, kind.snapshot_key, index, kind.model(user_id=user_id, **fields))


def _import_history(user_id: int, snapshot: Mapping, report: ImportReport) -> None:
    history = snapshot.get("completionHistory")
    if history is None:
        return
    if not isinstance(history, Mapping):
        report.skip("completionHistory", None, "expected a date to count mapping")
        return
    for raw_day, count in history.items():
        day = parse_day(raw_day)
        if day is None:
            report.skip("completionHistory", raw_day, "not a calendar date")
            continue
        if not _is_count(count):
            report.skip("completionHistory", raw_day, f"count must be an integer from 0 to {INT_MAX}")
            continue
        _insert(
            report,
            "completionHistory",
            raw_day,
            CompletionHistory(user_id=user_id, record_date=day, completed_count=count),
        )


def _import_templates(user_id: int, snapshot: Mapping, report: ImportReport) -> None:
    for index, raw in enumerate(_section(snapshot, "customTemplates", report)):
        try:
            item = CustomTemplateImport.model_validate(raw)
        except ValidationError as exc:
            report.skip("customTemplates", index, _describe(exc))
            continue
        _insert(report, "customTemplates", index, CustomTemplate(user_id=user_id, **item.model_dump()))


def _apply_streak(streak: UserStreak, snapshot: Mapping, report: ImportReport) -> None:
    """Overwrite only the streak counters the snapshot carries."""
    for key, attr in STREAK_FIELDS:
        value = snapshot.get(key)
        if value is None:
            continue
        if not _is_count(value):
            report.skip("streak", key, f"must be an integer from 0 to {INT_MAX}")
            continue
        setattr(streak, attr, value)


def import_state(user_id: int, snapshot: Mapping, today: Optional[date] = None) -> Dict[str, Any]:
    """Replace the user's habits, journals, history and templates with ``snapshot``.

    The user row and streak row survive; streak counters are overwritten only
    when present in the snapshot.
    """
    report = ImportReport(user_id)
    with user_locks.hold(user_id):
        try:
            streak = lock_streak(user_id)
            today = today or today_for_user(user_id)
            _wipe(user_id)
            _import_habits(user_id, _section(snapshot, "habits", report), today, report)
            _import_journals(user_id, snapshot, today, report)
            _import_history(user_id, snapshot, report)
            _import_templates(user_id, snapshot, report)
            _apply_streak(streak, snapshot, report)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    logger.info(
        "Imported snapshot for user %s: %s, %s skipped",
        user_id,
        dict(report.imported),
        len(report.skipped),
    )
    return {"success": True, "report": report.to_dict()}
