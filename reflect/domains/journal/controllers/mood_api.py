"""Mood catalog JSON API."""

from __future__ import annotations

from flask import Blueprint, jsonify

from reflect.domains.journal.mappers import map_mood
from reflect.domains.journal.moods import list_moods

mood_api_bp = Blueprint("mood_api", __name__)


@mood_api_bp.get("")
def list_mood_catalog():
    return jsonify({"ok": True, "items": [map_mood(m) for m in list_moods()]})
