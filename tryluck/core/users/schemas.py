"""User schemas for profile responses and updates."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from tryluck.core.utils.dates import is_valid_timezone
from tryluck.core.utils.serialization import CamelModel


class UserResponse(CamelModel):
    id: int
    email: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    auth_method: str
    timezone: Optional[str] = None
    created_at: Optional[datetime] = None
    last_active: Optional[datetime] = None


class ProfileUpdateRequest(CamelModel):
    display_name: Optional[str] = Field(default=None, max_length=255)
    avatar_url: Optional[str] = None
    timezone: Optional[str] = Field(default=None, max_length=64)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value and not is_valid_timezone(value):
            raise ValueError("unknown timezone")
        return value


def serialize_user(user) -> dict:
    return UserResponse.model_validate(user).to_json()
