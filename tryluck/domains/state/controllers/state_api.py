"""State sync endpoints: full snapshot, day reset and full-replace import."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from tryluck.core.utils.decorators import current_user_id, user_required
from tryluck.domains.state.services.day_reset_service import perform_day_reset
from tryluck.domains.state.services.import_service import import_state
from tryluck.domains.state.services.snapshot_service import get_full_state

state_api_bp = Blueprint("state_api", __name__)


@state_api_bp.get("")
@user_required
def full_state():
    return jsonify(get_full_state(current_user_id()))


@state_api_bp.post("/day-reset")
@user_required
def day_reset():
    return jsonify(perform_day_reset(current_user_id()))


@state_api_bp.post("/import")
@user_required
def import_snapshot():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify(import_state(current_user_id(), payload))
