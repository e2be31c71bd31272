"""Draft JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from reflect.core.utils.decorators import csrf_protected
from reflect.core.utils.validation import jsonable_errors
from reflect.domains.journal.mappers import map_draft
from reflect.domains.journal.schemas.journal_schemas import DraftSave
from reflect.domains.journal.services import draft_service

draft_api_bp = Blueprint("draft_api", __name__)


@draft_api_bp.get("")
@jwt_required()
def get_draft():
    draft = draft_service.get_draft(int(get_jwt_identity()))
    # No draft is an empty result, not an error.
    return jsonify({"ok": True, "draft": map_draft(draft) if draft else None})


@draft_api_bp.put("")
@jwt_required()
@csrf_protected
def save_draft():
    payload = request.get_json(silent=True) or {}
    try:
        data = DraftSave.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    draft = draft_service.save_draft(int(get_jwt_identity()), **data.model_dump())
    return jsonify({"ok": True, "draft": map_draft(draft)})
