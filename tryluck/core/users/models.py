"""User account model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from tryluck.extensions import db

AUTH_METHODS = ("google", "email", "anonymous")


class User(db.Model):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    display_name: Mapped[str | None] = mapped_column(db.String(255))
    avatar_url: Mapped[str | None] = mapped_column(db.Text)
    auth_method: Mapped[str] = mapped_column(db.String(20), nullable=False, default="email")
    google_id: Mapped[str | None] = mapped_column(db.String(255), unique=True)
    password_hash: Mapped[str | None] = mapped_column(db.String(255))
    timezone: Mapped[str | None] = mapped_column(db.String(64))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    last_active: Mapped[datetime] = mapped_column(default=datetime.utcnow)
