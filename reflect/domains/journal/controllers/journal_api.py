"""Journal entry JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from reflect.core.utils.decorators import csrf_protected
from reflect.core.utils.validation import jsonable_errors
from reflect.domains.journal.mappers import map_entry
from reflect.domains.journal.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryListFilter,
    JournalEntryUpdate,
)
from reflect.domains.journal.services import journal_service

journal_api_bp = Blueprint("journal_api", __name__)

_STATUS_BY_ERROR = {"collection_not_found": 404, "not_found": 404}


def _service_error(exc: ValueError):
    code = str(exc) or "validation_error"
    return jsonify({"ok": False, "error": code}), _STATUS_BY_ERROR.get(code, 400)


@journal_api_bp.get("")
@jwt_required()
def list_journal():
    user_id = int(get_jwt_identity())
    try:
        filters = JournalEntryListFilter.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    entries, total = journal_service.list_entries(
        user_id,
        collection_id=filters.collection_id,
        unorganized=filters.unorganized,
        mood=filters.mood,
        search_text=filters.search_text,
        page=filters.page,
        per_page=filters.per_page,
    )
    pages = (total + filters.per_page - 1) // filters.per_page
    return jsonify(
        {
            "ok": True,
            "items": [map_entry(e) for e in entries],
            "page": filters.page,
            "pages": pages,
            "total": total,
        }
    )


@journal_api_bp.get("/<int:entry_id>")
@jwt_required()
def get_entry(entry_id: int):
    entry = journal_service.get_entry(int(get_jwt_identity()), entry_id)
    if not entry:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "entry": map_entry(entry)})


@journal_api_bp.post("")
@jwt_required()
@csrf_protected
def create_journal_entry():
    payload = request.get_json(silent=True) or {}
    try:
        data = JournalEntryCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    try:
        entry = journal_service.create_entry(int(get_jwt_identity()), **data.model_dump())
    except ValueError as exc:
        return _service_error(exc)
    return jsonify({"ok": True, "entry": map_entry(entry)}), 201


@journal_api_bp.patch("/<int:entry_id>")
@jwt_required()
@csrf_protected
def update_journal_entry(entry_id: int):
    payload = request.get_json(silent=True) or {}
    try:
        data = JournalEntryUpdate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    # Only fields present in the request change; an explicit null collection_id unorganizes the entry.
    fields = data.model_dump(exclude_unset=True)
    try:
        entry = journal_service.update_entry(int(get_jwt_identity()), entry_id, **fields)
    except ValueError as exc:
        return _service_error(exc)
    if not entry:
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True, "entry": map_entry(entry)})


@journal_api_bp.delete("/<int:entry_id>")
@jwt_required()
@csrf_protected
def delete_journal_entry(entry_id: int):
    if not journal_service.delete_entry(int(get_jwt_identity()), entry_id):
        return jsonify({"ok": False, "error": "not_found"}), 404
    return jsonify({"ok": True})
