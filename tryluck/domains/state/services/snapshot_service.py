"""Read-only assembly of a user's full state document."""

from __future__ import annotations

from typing import Any, Dict

from tryluck.core.users.services import today_for_user
from tryluck.core.utils.dates import format_day
from tryluck.domains.habits.schemas.habit_schemas import serialize_habit, serialize_template
from tryluck.domains.habits.services.habit_service import list_habits, list_templates
from tryluck.domains.journal.registry import JOURNAL_KINDS
from tryluck.domains.journal.services.journal_service import list_entries, serialize_entry
from tryluck.domains.onboarding.schemas.onboarding_schemas import serialize_onboarding
from tryluck.domains.onboarding.services.onboarding_service import get_onboarding
from tryluck.domains.state.models import CompletionHistory
from tryluck.domains.state.services.streaks import read_streak


def completion_history_map(user_id: int) -> Dict[str, int]:
    rows = (
        CompletionHistory.query.filter_by(user_id=user_id)
        .order_by(CompletionHistory.record_date.desc())
        .all()
    )
    return {format_day(row.record_date): row.completed_count for row in rows}


def get_full_state(user_id: int) -> Dict[str, Any]:
    """Compose the snapshot the client hydrates from. Performs no writes."""
    streak = read_streak(user_id)
    state: Dict[str, Any] = {
        "habits": [serialize_habit(habit) for habit in list_habits(user_id)],
        "completionHistory": completion_history_map(user_id),
        "streak": streak.current_streak if streak else 0,
        "maxStreak": streak.max_streak if streak else 0,
        "onboarding": serialize_onboarding(get_onboarding(user_id)),
        "customTemplates": [serialize_template(t) for t in list_templates(user_id)],
    }
    for kind in JOURNAL_KINDS.values():
        state[kind.snapshot_key] = [
            serialize_entry(kind, entry) for entry in list_entries(user_id, kind)
        ]
    state["currentDate"] = format_day(today_for_user(user_id))
    return state
