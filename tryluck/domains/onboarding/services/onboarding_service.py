"""Onboarding survey persistence and first-run habit seeding."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from tryluck.core.users.services import today_for_user
from tryluck.core.utils.db import insert_or_ignore
from tryluck.domains.habits.models.habit_models import INITIAL_COLUMN, Habit
from tryluck.domains.onboarding.models import Onboarding
from tryluck.extensions import db

logger = logging.getLogger(__name__)

SURVEY_FIELDS = (
    "main_pain",
    "desired_outcome",
    "priority_areas",
    "daily_minutes",
    "wake_time",
    "tracker_experience",
)


def get_onboarding(user_id: int) -> Optional[Onboarding]:
    return Onboarding.query.filter_by(user_id=user_id).first()


def upsert_onboarding(user_id: int, **fields) -> Onboarding:
    record = get_onboarding(user_id)
    if record is None:
        record = Onboarding(user_id=user_id)
        db.session.add(record)
    for key in SURVEY_FIELDS:
        if key in fields:
            setattr(record, key, fields[key])
    db.session.commit()
    return record


def complete_onboarding(user_id: int, template_ids: Iterable[str]) -> int:
    """Mark onboarding done and add one habit per template. Returns habits created."""
    record = get_onboarding(user_id)
    if record is None:
        record = Onboarding(user_id=user_id)
        db.session.add(record)
    record.onboarding_completed = True

    today = today_for_user(user_id)
    created = 0
    for index, template_id in enumerate(template_ids):
        habit = Habit(
            user_id=user_id,
            template_id=template_id,
            column_status=INITIAL_COLUMN,
            sort_order=index,
            date_added=today,
        )
        if insert_or_ignore(habit):
            created += 1
    db.session.commit()
    logger.info("User %s completed onboarding with %s habits", user_id, created)
    return created
