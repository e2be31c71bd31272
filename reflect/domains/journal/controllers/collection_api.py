"""Collection JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from pydantic import ValidationError

from reflect.core.utils.decorators import csrf_protected
from reflect.core.utils.validation import jsonable_errors
from reflect.domains.journal.mappers import map_collection
from reflect.domains.journal.schemas.journal_schemas import CollectionCreate
from reflect.domains.journal.services import collection_service

collection_api_bp = Blueprint("collection_api", __name__)


@collection_api_bp.get("")
@jwt_required()
def list_collections():
    collections = collection_service.list_collections(int(get_jwt_identity()))
    return jsonify({"ok": True, "items": [map_collection(c) for c in collections]})


@collection_api_bp.post("")
@jwt_required()
@csrf_protected
def create_collection():
    payload = request.get_json(silent=True) or {}
    try:
        data = CollectionCreate.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"ok": False, "error": "validation_error", "details": jsonable_errors(exc)}), 400
    try:
        collection = collection_service.create_collection(int(get_jwt_identity()), data.name)
    except ValueError as exc:
        code = str(exc)
        if code == "collection_exists":
            return jsonify({"ok": False, "error": code}), 409
        return jsonify({"ok": False, "error": "validation_error"}), 400
    return jsonify({"ok": True, "collection": map_collection(collection)}), 201
