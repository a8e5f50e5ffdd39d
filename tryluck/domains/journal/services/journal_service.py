"""Journal services: append-only entries dispatched by type tag."""

from __future__ import annotations

import logging
from typing import List

from tryluck.core.users.services import today_for_user
from tryluck.domains.journal.registry import JournalKind
from tryluck.extensions import db

logger = logging.getLogger(__name__)


def list_entries(user_id: int, kind: JournalKind) -> List:
    model = kind.model
    return (
        model.query.filter_by(user_id=user_id)
        .order_by(model.entry_date.desc(), model.id.desc())
        .all()
    )


def create_entry(user_id: int, kind: JournalKind, payload) -> object:
    """Persist a validated create payload for ``kind``."""
    fields = payload.model_dump()
    fields["entry_date"] = fields.get("entry_date") or today_for_user(user_id)
    entry = kind.model(user_id=user_id, **fields)
    db.session.add(entry)
    db.session.commit()
    return entry


def serialize_entry(kind: JournalKind, entry) -> dict:
    return kind.response_schema.model_validate(entry).to_json()
