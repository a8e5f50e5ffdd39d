"""Journal JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from tryluck.core.utils.decorators import current_user_id, user_required
from tryluck.core.utils.serialization import jsonable_errors
from tryluck.domains.journal.registry import JOURNAL_TYPES, get_kind
from tryluck.domains.journal.services.journal_service import (
    create_entry,
    list_entries,
    serialize_entry,
)

journal_api_bp = Blueprint("journal_api", __name__)


def _unknown_type():
    return (
        jsonify({"ok": False, "error": "invalid_type", "validTypes": list(JOURNAL_TYPES)}),
        400,
    )


@journal_api_bp.get("/<string:journal_type>")
@user_required
def list_journal(journal_type: str):
    kind = get_kind(journal_type)
    if kind is None:
        return _unknown_type()
    entries = list_entries(current_user_id(), kind)
    return jsonify({"ok": True, "entries": [serialize_entry(kind, e) for e in entries]})


@journal_api_bp.post("/<string:journal_type>")
@user_required
def create_journal(journal_type: str):
    kind = get_kind(journal_type)
    if kind is None:
        return _unknown_type()
    payload = request.get_json(silent=True) or {}
    try:
        data = kind.create_schema.model_validate(payload)
    except ValidationError as exc:
        return (
            jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}),
            400,
        )
    entry = create_entry(current_user_id(), kind, data)
    return jsonify({"ok": True, "entry": serialize_entry(kind, entry)}), 201
