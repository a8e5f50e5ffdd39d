"""Session helpers shared by services."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from tryluck.extensions import db


def insert_or_ignore(instance) -> bool:
    """Insert ``instance`` inside a savepoint; a unique-constraint conflict is a no-op.

    Returns True when the row was written. The outer transaction stays usable either way.
    """
    try:
        with db.session.begin_nested():
            db.session.add(instance)
    except IntegrityError:
        return False
    return True
