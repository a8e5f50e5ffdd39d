"""Habit board services."""

from tryluck.domains.habits.services.habit_service import (  # noqa: F401
    add_habit,
    add_log_entry,
    add_time,
    complete_habit,
    create_template,
    delete_habit,
    delete_template,
    list_habits,
    list_templates,
    reorder_habits,
    update_checklist,
    update_habit,
)
