"""Read-only aggregate queries for the admin dashboard."""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import func, or_

from tryluck.core.users.models import User
from tryluck.core.users.schemas import serialize_user
from tryluck.core.utils.dates import date_offset, day_start_utc, format_day, local_today
from tryluck.core.utils.pagination import paginate
from tryluck.domains.habits.models.habit_models import Habit, HabitCompletion, HabitLogEntry
from tryluck.domains.journal.registry import JOURNAL_KINDS
from tryluck.domains.onboarding.schemas.onboarding_schemas import serialize_onboarding
from tryluck.domains.onboarding.services.onboarding_service import get_onboarding
from tryluck.domains.state.models import CompletionHistory, UserStreak
from tryluck.extensions import db

TOP_TEMPLATES = 10
REGISTRATION_WINDOW_DAYS = 30


def _count(model, *criteria) -> int:
    return db.session.query(func.count()).select_from(model).filter(*criteria).scalar() or 0


def _minutes(*criteria) -> int:
    total = (
        db.session.query(func.coalesce(func.sum(Habit.total_minutes_spent), 0))
        .filter(*criteria)
        .scalar()
    )
    return int(total or 0)


def dashboard_stats() -> Dict[str, Any]:
    today = local_today()
    today_start = day_start_utc(today)
    week_start = day_start_utc(date_offset(today, -7))
    window_start = day_start_utc(date_offset(today, -REGISTRATION_WINDOW_DAYS))

    top_templates = (
        db.session.query(Habit.template_id, func.count(Habit.id).label("count"))
        .group_by(Habit.template_id)
        .order_by(func.count(Habit.id).desc(), Habit.template_id)
        .limit(TOP_TEMPLATES)
        .all()
    )
    registration_day = func.date(User.created_at)
    registrations = (
        db.session.query(registration_day.label("day"), func.count(User.id))
        .filter(User.created_at >= window_start)
        .group_by(registration_day)
        .order_by(registration_day)
        .all()
    )

    return {
        "totalUsers": _count(User),
        "usersToday": _count(User, User.created_at >= today_start),
        "usersThisWeek": _count(User, User.created_at >= week_start),
        "activeToday": _count(User, User.last_active >= today_start),
        "activeThisWeek": _count(User, User.last_active >= week_start),
        "totalHabitsCreated": _count(Habit),
        "totalCompletions": _count(HabitCompletion),
        "totalJournalEntries": sum(_count(kind.model) for kind in JOURNAL_KINDS.values()),
        "totalMinutesTracked": _minutes(),
        "topHabitTemplates": [
            {"templateId": template_id, "count": count} for template_id, count in top_templates
        ],
        "registrationsByDay": [{"date": str(day), "count": count} for day, count in registrations],
    }


def list_users(page: int = 1, per_page: int = 20, search: Optional[str] = None) -> Dict[str, Any]:
    query = User.query.order_by(User.created_at.desc(), User.id.desc())
    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(or_(User.email.ilike(pattern), User.display_name.ilike(pattern)))
    result = paginate(query, page, per_page)

    users = []
    for user in result["items"]:
        streak = db.session.get(UserStreak, user.id)
        users.append(
            {
                **serialize_user(user),
                "habitCount": _count(Habit, Habit.user_id == user.id),
                "totalCompletions": _count(HabitCompletion, HabitCompletion.user_id == user.id),
                "currentStreak": streak.current_streak if streak else 0,
                "totalMinutes": _minutes(Habit.user_id == user.id),
            }
        )
    return {
        "users": users,
        "total": result["total"],
        "page": result["page"],
        "limit": result["per_page"],
        "totalPages": result["pages"],
    }


def user_detail(user_id: int) -> Optional[Dict[str, Any]]:
    user = db.session.get(User, user_id)
    if not user:
        return None
    streak = db.session.get(UserStreak, user_id)
    habits = Habit.query.filter_by(user_id=user_id).order_by(Habit.sort_order, Habit.id).all()
    per_habit = dict(
        db.session.query(HabitCompletion.habit_id, func.count(HabitCompletion.id))
        .filter(HabitCompletion.user_id == user_id)
        .group_by(HabitCompletion.habit_id)
        .all()
    )
    history = (
        CompletionHistory.query.filter_by(user_id=user_id)
        .order_by(CompletionHistory.record_date.desc())
        .all()
    )
    return {
        "user": serialize_user(user),
        "streaks": {
            "current": streak.current_streak if streak else 0,
            "max": streak.max_streak if streak else 0,
        },
        "onboarding": serialize_onboarding(get_onboarding(user_id)),
        "stats": {
            "habitCount": len(habits),
            "totalCompletions": sum(per_habit.values()),
            "totalLogEntries": _count(HabitLogEntry, HabitLogEntry.user_id == user_id),
            "totalMinutes": _minutes(Habit.user_id == user_id),
            "journalEntries": {
                tag: _count(kind.model, kind.model.user_id == user_id)
                for tag, kind in JOURNAL_KINDS.items()
            },
        },
        "habits": [
            {
                "id": habit.id,
                "templateId": habit.template_id,
                "dateAdded": format_day(habit.date_added),
                "totalMinutesSpent": habit.total_minutes_spent,
                "completions": per_habit.get(habit.id, 0),
            }
            for habit in habits
        ],
        "completionHistory": [
            {"date": format_day(row.record_date), "completedCount": row.completed_count}
            for row in history
        ],
    }
