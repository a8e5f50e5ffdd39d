"""Admin endpoints: login and read-only statistics."""

from __future__ import annotations

from datetime import datetime, timezone

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from tryluck.core.admin.services import dashboard_stats, list_users, user_detail
from tryluck.core.auth.auth_service import authenticate_admin, issue_admin_token
from tryluck.core.auth.schemas import AdminLoginRequest
from tryluck.core.utils.decorators import admin_required
from tryluck.core.utils.serialization import jsonable_errors
from tryluck.extensions import limiter

admin_api_bp = Blueprint("admin_api", __name__)


@admin_api_bp.get("/ping")
def ping():
    return jsonify({"ping": "pong", "time": datetime.now(timezone.utc).isoformat()})


@admin_api_bp.post("/login")
@limiter.limit("5/minute")
def login():
    payload = request.get_json(silent=True) or {}
    try:
        data = AdminLoginRequest.model_validate(payload)
    except ValidationError as exc:
        return (
            jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}),
            400,
        )
    admin = authenticate_admin(data.username, data.password)
    if not admin:
        return jsonify({"ok": False, "error": "invalid_credentials"}), 401
    return jsonify({"ok": True, "token": issue_admin_token(admin), "username": admin.username})


@admin_api_bp.get("/dashboard")
@admin_required
def dashboard():
    return jsonify({"ok": True, **dashboard_stats()})


@admin_api_bp.get("/users")
@admin_required
def users():
    page = request.args.get("page", default=1, type=int) or 1
    limit = request.args.get("limit", default=20, type=int) or 20
    search = request.args.get("search") or None
    return jsonify({"ok": True, **list_users(page, limit, search)})


@admin_api_bp.get("/users/<int:user_id>")
@admin_required
def user(user_id: int):
    detail = user_detail(user_id)
    if detail is None:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, **detail})
