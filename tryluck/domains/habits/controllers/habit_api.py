"""Habits JSON API controllers (thin, schema-validated)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from tryluck.core.utils.decorators import current_user_id, user_required
from tryluck.core.utils.serialization import jsonable_errors
from tryluck.domains.habits import services as habit_services
from tryluck.domains.habits.schemas.habit_schemas import (
    AddTimeRequest,
    ChecklistUpdate,
    CompleteRequest,
    CustomTemplateCreate,
    HabitCreate,
    HabitUpdate,
    LogEntryCreate,
    LogEntryResponse,
    ReorderRequest,
    serialize_habit,
    serialize_template,
)

habit_api_bp = Blueprint("habit_api", __name__)


def _validation_error(exc: ValidationError):
    return (
        jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}),
        400,
    )


def _not_found():
    return jsonify({"ok": False, "error": "not_found"}), 404


@habit_api_bp.get("")
@user_required
def list_habits():
    habits = habit_services.list_habits(current_user_id())
    return jsonify({"ok": True, "habits": [serialize_habit(habit) for habit in habits]})


@habit_api_bp.post("")
@user_required
def add_habit():
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitCreate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    try:
        habit = habit_services.add_habit(current_user_id(), data.template_id, data.order)
    except ValueError as exc:
        code = str(exc)
        if code == "duplicate":
            return jsonify({"ok": False, "error": "duplicate"}), 409
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "habit": serialize_habit(habit)}), 201


@habit_api_bp.put("/reorder")
@user_required
def reorder_habits():
    payload = request.get_json(silent=True) or {}
    try:
        data = ReorderRequest.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    updated = habit_services.reorder_habits(
        current_user_id(), [item.model_dump() for item in data.habits]
    )
    return jsonify({"ok": True, "success": True, "updated": updated})


@habit_api_bp.put("/<int:habit_id>")
@user_required
def update_habit(habit_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = HabitUpdate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    habit = habit_services.update_habit(
        current_user_id(), habit_id, **data.model_dump(exclude_unset=True)
    )
    if not habit:
        return _not_found()
    return jsonify({"ok": True, "habit": serialize_habit(habit)})


@habit_api_bp.delete("/<int:habit_id>")
@user_required
def delete_habit(habit_id: int):
    if not habit_services.delete_habit(current_user_id(), habit_id):
        return _not_found()
    return jsonify({"ok": True, "success": True})


@habit_api_bp.post("/<int:habit_id>/complete")
@user_required
def complete_habit(habit_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = CompleteRequest.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    created = habit_services.complete_habit(current_user_id(), habit_id, data.completed_date)
    if created is None:
        return _not_found()
    return jsonify({"ok": True, "success": True, "created": created})


@habit_api_bp.post("/<int:habit_id>/log")
@user_required
def add_log_entry(habit_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = LogEntryCreate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    entry = habit_services.add_log_entry(
        current_user_id(),
        habit_id,
        text=data.text,
        entry_date=data.entry_date,
        duration_minutes=data.duration_minutes,
    )
    if not entry:
        return _not_found()
    return jsonify({"ok": True, "entry": LogEntryResponse.model_validate(entry).to_json()}), 201


@habit_api_bp.post("/<int:habit_id>/time")
@user_required
def add_time(habit_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = AddTimeRequest.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    if not habit_services.add_time(current_user_id(), habit_id, data.minutes):
        return _not_found()
    return jsonify({"ok": True, "success": True})


@habit_api_bp.put("/<int:habit_id>/checklist")
@user_required
def update_checklist(habit_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = ChecklistUpdate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    items = [item.model_dump() for item in data.items]
    if not habit_services.update_checklist(current_user_id(), habit_id, items):
        return _not_found()
    return jsonify({"ok": True, "success": True})


@habit_api_bp.get("/templates")
@user_required
def list_templates():
    templates = habit_services.list_templates(current_user_id())
    return jsonify({"ok": True, "templates": [serialize_template(t) for t in templates]})


@habit_api_bp.post("/templates")
@user_required
def create_template():
    payload = request.get_json(silent=True) or {}
    try:
        data = CustomTemplateCreate.model_validate(payload)
    except ValidationError as exc:
        return _validation_error(exc)
    template = habit_services.create_template(current_user_id(), **data.model_dump())
    return jsonify({"ok": True, "template": serialize_template(template)}), 201


@habit_api_bp.delete("/templates/<int:template_id>")
@user_required
def delete_template(template_id: int):
    if not habit_services.delete_template(current_user_id(), template_id):
        return _not_found()
    return jsonify({"ok": True, "success": True})
