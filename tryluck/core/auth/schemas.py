"""Schemas for auth flows (register, login, password change)."""

from __future__ import annotations

from typing import Optional

from pydantic import EmailStr, Field, field_validator

from tryluck.core.utils.serialization import CamelModel


class RegisterRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AnonymousRequest(CamelModel):
    display_name: Optional[str] = Field(default=None, max_length=255)


class GoogleLoginRequest(CamelModel):
    id_token: str = Field(min_length=1)


class PasswordChangeRequest(CamelModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class AdminLoginRequest(CamelModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
