"""Auth HTTP controllers (API only)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from tryluck.core.auth.auth_service import (
    authenticate_google,
    authenticate_user,
    change_password,
    issue_user_token,
    register_anonymous,
    register_user,
)
from tryluck.core.auth.schemas import (
    AnonymousRequest,
    GoogleLoginRequest,
    LoginRequest,
    PasswordChangeRequest,
    RegisterRequest,
)
from tryluck.core.users.schemas import ProfileUpdateRequest, serialize_user
from tryluck.core.users.services import get_user, touch_last_active, update_profile
from tryluck.core.utils.decorators import current_user_id, user_required
from tryluck.core.utils.serialization import jsonable_errors
from tryluck.extensions import limiter

auth_bp = Blueprint("auth_api", __name__)


def _bad_request(exc: ValidationError):
    return (
        jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}),
        400,
    )


def _session(user):
    return jsonify({"ok": True, "token": issue_user_token(user), "user": serialize_user(user)})


@auth_bp.post("/register")
@limiter.limit("5/minute")
def register():
    payload = request.get_json(silent=True) or {}
    try:
        data = RegisterRequest.model_validate(payload)
    except ValidationError as exc:
        return _bad_request(exc)
    try:
        user = register_user(data)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    return _session(user)


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    payload = request.get_json(silent=True) or {}
    try:
        data = LoginRequest.model_validate(payload)
    except ValidationError as exc:
        return _bad_request(exc)
    user = authenticate_user(data.email, data.password)
    if not user:
        return jsonify({"ok": False, "error": "invalid_credentials"}), 401
    return _session(user)


@auth_bp.post("/anonymous")
@limiter.limit("10/minute")
def anonymous():
    payload = request.get_json(silent=True) or {}
    try:
        data = AnonymousRequest.model_validate(payload)
    except ValidationError as exc:
        return _bad_request(exc)
    return _session(register_anonymous(data.display_name))


@auth_bp.post("/google")
@limiter.limit("10/minute")
def google():
    payload = request.get_json(silent=True) or {}
    try:
        data = GoogleLoginRequest.model_validate(payload)
    except ValidationError as exc:
        return _bad_request(exc)
    try:
        user = authenticate_google(data.id_token)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 401
    return _session(user)


@auth_bp.get("/me")
@user_required
def me():
    user = get_user(current_user_id())
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    touch_last_active(user)
    return jsonify({"ok": True, "user": serialize_user(user)})


@auth_bp.put("/profile")
@user_required
def profile():
    user = get_user(current_user_id())
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    payload = request.get_json(silent=True) or {}
    try:
        data = ProfileUpdateRequest.model_validate(payload)
    except ValidationError as exc:
        return _bad_request(exc)
    update_profile(user, data)
    return jsonify({"ok": True, "user": serialize_user(user)})


@auth_bp.put("/password")
@user_required
def password():
    user = get_user(current_user_id())
    if not user:
        return jsonify({"ok": False, "error": "not_found"}), 404
    payload = request.get_json(silent=True) or {}
    try:
        data = PasswordChangeRequest.model_validate(payload)
    except ValidationError as exc:
        return _bad_request(exc)
    try:
        change_password(user, data.old_password, data.new_password)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    return jsonify({"ok": True, "success": True})
