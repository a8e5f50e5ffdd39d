"""Calendar-day helpers.

Days travel as ``YYYY-MM-DD`` strings and are always computed on the wall
clock of an explicit timezone, never on UTC by accident.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from flask import current_app, has_app_context

DAY_FORMAT = "%Y-%m-%d"


def resolve_timezone(name: Optional[str] = None) -> Optional[tzinfo]:
    """Return the zone for ``name``, falling back to ``APP_TIMEZONE``.

    ``None`` means the server's local zone.
    """
    candidates = [name]
    if has_app_context():
        candidates.append(current_app.config.get("APP_TIMEZONE"))
    for candidate in candidates:
        if not candidate:
            continue
        try:
            return ZoneInfo(candidate)
        except (ZoneInfoNotFoundError, ValueError):
            continue
    return None


def local_now(tz_name: Optional[str] = None) -> datetime:
    tz = resolve_timezone(tz_name)
    if tz is None:
        return datetime.now()
    return datetime.now(tz)


def local_today(tz_name: Optional[str] = None) -> date:
    return local_now(tz_name).date()


def date_offset(day: date, days: int) -> date:
    return day + timedelta(days=days)


def format_day(day: date) -> str:
    return day.strftime(DAY_FORMAT)


def parse_day(value: Any) -> Optional[date]:
    """Parse a calendar day; tolerates full ISO timestamps. ``None`` if unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    raw = value.strip().split("T")[0]
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def is_valid_timezone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


def day_start_utc(day: date, tz_name: Optional[str] = None) -> datetime:
    """Naive UTC instant at which ``day`` begins in the resolved zone."""
    tz = resolve_timezone(tz_name)
    start = datetime.combine(day, time.min)
    start = start.replace(tzinfo=tz) if tz is not None else start.astimezone()
    return start.astimezone(timezone.utc).replace(tzinfo=None)
