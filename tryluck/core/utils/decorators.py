"""Reusable decorators for controllers."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

F = TypeVar("F", bound=Callable)

ROLE_USER = "user"
ROLE_ADMIN = "admin"


def _verified_role() -> str | None:
    verify_jwt_in_request()
    claims = get_jwt() or {}
    return claims.get("role")


def user_required(fn: F) -> F:
    """Require a user bearer token; admin tokens do not identify a user."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        try:
            role = _verified_role()
        except (JWTExtendedException, PyJWTError):
            return jsonify({"ok": False, "error": "unauthorized"}), 401
        if role != ROLE_USER:
            return jsonify({"ok": False, "error": "unauthorized"}), 401
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def admin_required(fn: F) -> F:
    """Require an admin bearer token."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        try:
            role = _verified_role()
        except (JWTExtendedException, PyJWTError):
            return jsonify({"ok": False, "error": "unauthorized"}), 401
        if role != ROLE_ADMIN:
            return jsonify({"ok": False, "error": "forbidden"}), 403
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int:
    return int(get_jwt_identity())
