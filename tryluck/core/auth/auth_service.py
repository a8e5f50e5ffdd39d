"""Authentication service layer."""

from __future__ import annotations

import logging
import secrets
import time
from datetime import datetime
from typing import Optional

from flask import current_app
from flask_jwt_extended import create_access_token
from sqlalchemy import func

from tryluck.core.auth.google import GoogleTokenError, verify_id_token
from tryluck.core.auth.models import AdminUser
from tryluck.core.auth.password import hash_password, verify_password
from tryluck.core.auth.schemas import RegisterRequest
from tryluck.core.users.models import User
from tryluck.core.utils.decorators import ROLE_ADMIN, ROLE_USER
from tryluck.extensions import db

logger = logging.getLogger(__name__)

ANONYMOUS_EMAIL_DOMAIN = "anonymous.local"


def issue_user_token(user: User) -> str:
    return create_access_token(identity=str(user.id), additional_claims={"role": ROLE_USER})


def issue_admin_token(admin: AdminUser) -> str:
    return create_access_token(
        identity=f"admin:{admin.id}",
        additional_claims={"role": ROLE_ADMIN},
        expires_delta=current_app.config["ADMIN_TOKEN_EXPIRES"],
    )


def _find_by_email(email: str) -> Optional[User]:
    return User.query.filter(func.lower(User.email) == email.strip().lower()).first()


def register_user(payload: RegisterRequest) -> User:
    if _find_by_email(payload.email):
        raise ValueError("email_already_exists")
    user = User(
        email=payload.email,
        display_name=payload.name,
        auth_method="email",
        password_hash=hash_password(payload.password),
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s via email", user.id)
    return user


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid; touches last_active."""
    user = _find_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        return None
    user.last_active = datetime.utcnow()
    db.session.commit()
    return user


def register_anonymous(display_name: Optional[str]) -> User:
    email = f"anon_{int(time.time() * 1000)}_{secrets.token_hex(6)}@{ANONYMOUS_EMAIL_DOMAIN}"
    user = User(
        email=email,
        display_name=display_name or "Anonymous",
        auth_method="anonymous",
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Registered anonymous user %s", user.id)
    return user


def authenticate_google(id_token: str) -> User:
    """Find the user by Google id, else link by email, else create one."""
    try:
        claims = verify_id_token(id_token)
    except GoogleTokenError as exc:
        logger.info("Google sign-in rejected: %s", exc)
        raise ValueError("invalid_google_token") from exc

    google_id = claims["sub"]
    user = User.query.filter_by(google_id=google_id).first()
    if user is None:
        user = _find_by_email(claims["email"])
        if user is not None:
            user.google_id = google_id
            user.avatar_url = claims.get("picture") or user.avatar_url
            user.auth_method = "google"
            logger.info("Linked Google account to user %s", user.id)
        else:
            user = User(
                email=claims["email"].strip().lower(),
                google_id=google_id,
                display_name=claims.get("name") or "User",
                avatar_url=claims.get("picture"),
                auth_method="google",
            )
            db.session.add(user)
    user.last_active = datetime.utcnow()
    db.session.commit()
    return user


def change_password(user: User, old_password: str, new_password: str) -> None:
    if not user.password_hash:
        raise ValueError("no_password")
    if not verify_password(old_password, user.password_hash):
        raise ValueError("invalid_credentials")
    user.password_hash = hash_password(new_password)
    db.session.commit()


def authenticate_admin(username: str, password: str) -> Optional[AdminUser]:
    admin = AdminUser.query.filter_by(username=username).first()
    if not admin or not verify_password(password, admin.password_hash):
        return None
    return admin


def ensure_admin(username: str, password: str) -> tuple[AdminUser, bool]:
    """Create the admin account if missing. Returns (admin, created)."""
    admin = AdminUser.query.filter_by(username=username).first()
    if admin:
        return admin, False
    admin = AdminUser(username=username, password_hash=hash_password(password))
    db.session.add(admin)
    db.session.commit()
    return admin, True
