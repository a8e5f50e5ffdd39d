"""User service layer."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from tryluck.core.users.models import User
from tryluck.core.users.schemas import ProfileUpdateRequest
from tryluck.core.utils.dates import local_today
from tryluck.extensions import db


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def touch_last_active(user: User) -> User:
    user.last_active = datetime.utcnow()
    db.session.commit()
    return user


def update_profile(user: User, payload: ProfileUpdateRequest) -> User:
    fields = payload.model_fields_set
    if "display_name" in fields:
        user.display_name = payload.display_name
    if "avatar_url" in fields:
        user.avatar_url = payload.avatar_url
    if "timezone" in fields:
        user.timezone = payload.timezone or None
    db.session.commit()
    return user


def today_for_user(user_id: int) -> date:
    """Calendar date for the user: own timezone, else the app default."""
    user = db.session.get(User, user_id)
    return local_today(user.timezone if user else None)
