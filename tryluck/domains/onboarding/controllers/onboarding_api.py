"""Onboarding JSON API controllers."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from tryluck.core.utils.decorators import current_user_id, user_required
from tryluck.core.utils.serialization import jsonable_errors
from tryluck.domains.onboarding.schemas.onboarding_schemas import (
    OnboardingComplete,
    OnboardingUpdate,
    serialize_onboarding,
)
from tryluck.domains.onboarding.services.onboarding_service import (
    complete_onboarding,
    get_onboarding,
    upsert_onboarding,
)

onboarding_api_bp = Blueprint("onboarding_api", __name__)


def _validation_error(exc: ValidationError):
    return (
        jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}),
        400,
    )


@onboarding_api_bp.get("")
@user_required
def get_survey():
    record = get_onboarding(current_user_id())
    return jsonify({"ok": True, "onboarding": serialize_onboarding(record)})


@onboarding_api_bp.put("")
@user_required
def put_survey():
    payload = request.get_json(silent=True) or {}
    try:
        data = OnboardingUpdate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    record = upsert_onboarding(current_user_id(), **data.model_dump(exclude_unset=True))
    return jsonify({"ok": True, "onboarding": serialize_onboarding(record)})


@onboarding_api_bp.post("/complete")
@user_required
def complete():
    payload = request.get_json(silent=True) or {}
    try:
        data = OnboardingComplete.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    created = complete_onboarding(current_user_id(), data.template_ids)
    return jsonify({"ok": True, "success": True, "habitsCreated": created})
