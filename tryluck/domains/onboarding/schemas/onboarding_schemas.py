"""Onboarding DTOs."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from tryluck.core.utils.serialization import INT_MAX, CamelModel


class OnboardingUpdate(CamelModel):
    main_pain: Optional[str] = Field(default=None, max_length=20)
    desired_outcome: Optional[str] = None
    priority_areas: Optional[List[str]] = None
    daily_minutes: Optional[int] = Field(default=None, ge=0, le=INT_MAX)
    wake_time: Optional[str] = Field(default=None, max_length=10)
    tracker_experience: Optional[str] = Field(default=None, max_length=20)


class OnboardingComplete(CamelModel):
    template_ids: List[str] = Field(default_factory=list)


class OnboardingResponse(CamelModel):
    id: int
    user_id: int
    main_pain: Optional[str] = None
    desired_outcome: Optional[str] = None
    priority_areas: Optional[List[str]] = None
    daily_minutes: Optional[int] = None
    wake_time: Optional[str] = None
    tracker_experience: Optional[str] = None
    onboarding_completed: bool
    created_at: Optional[datetime] = None


def serialize_onboarding(record) -> Optional[dict]:
    if record is None:
        return None
    return OnboardingResponse.model_validate(record).to_json()
