"""Boundary operations the authoring workflow depends on.

Every operation takes the acting user's id explicitly. Results are plain
dicts shaped like the JSON API responses; failures raise ``ValueError`` with
an error code.
"""

from __future__ import annotations

from functools import wraps
from typing import List, Mapping, Optional, Protocol

from pydantic import ValidationError

from reflect.domains.journal.mappers import map_collection, map_draft, map_entry
from reflect.domains.journal.schemas.journal_schemas import DraftSave
from reflect.domains.journal.services import collection_service, draft_service, journal_service
from reflect.extensions import db


class JournalActions(Protocol):
    def list_collections(self, user_id: int) -> List[dict]: ...

    def create_collection(self, user_id: int, name: str) -> dict: ...

    def get_entry(self, user_id: int, entry_id: str) -> dict: ...

    def get_draft(self, user_id: int) -> Optional[dict]: ...

    def save_draft(self, user_id: int, title: str, content: str, mood: str) -> dict: ...

    def create_entry(self, user_id: int, payload: Mapping) -> dict: ...

    def update_entry(self, user_id: int, payload: Mapping) -> dict: ...


def _to_int(value, error_code: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(error_code)


def _collection_id(payload: Mapping) -> Optional[int]:
    value = payload.get("collection_id")
    if value in (None, ""):
        return None
    return _to_int(value, "collection_not_found")


def _rollback_on_error(fn):
    """Leave the session usable for the rest of the request after a failed write."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except Exception:
            db.session.rollback()
            raise

    return wrapper


class ServiceJournalActions:
    """JournalActions backed by the in-process service layer."""

    def list_collections(self, user_id: int) -> List[dict]:
        return [map_collection(c) for c in collection_service.list_collections(user_id)]

    @_rollback_on_error
    def create_collection(self, user_id: int, name: str) -> dict:
        return map_collection(collection_service.create_collection(user_id, name))

    def get_entry(self, user_id: int, entry_id) -> dict:
        entry = journal_service.get_entry(user_id, _to_int(entry_id, "not_found"))
        if entry is None:
            raise ValueError("not_found")
        return map_entry(entry)

    def get_draft(self, user_id: int) -> Optional[dict]:
        draft = draft_service.get_draft(user_id)
        return map_draft(draft) if draft else None

    @_rollback_on_error
    def save_draft(self, user_id: int, title: str, content: str, mood: str) -> dict:
        try:
            data = DraftSave.model_validate({"title": title, "content": content, "mood": mood})
        except ValidationError:
            raise ValueError("validation_error")
        return map_draft(draft_service.save_draft(user_id, **data.model_dump()))

    @_rollback_on_error
    def create_entry(self, user_id: int, payload: Mapping) -> dict:
        entry = journal_service.create_entry(
            user_id,
            title=payload.get("title", ""),
            content=payload.get("content", ""),
            mood=payload.get("mood", ""),
            mood_score=payload.get("mood_score"),
            mood_image_query=payload.get("mood_image_query"),
            collection_id=_collection_id(payload),
        )
        return map_entry(entry)

    @_rollback_on_error
    def update_entry(self, user_id: int, payload: Mapping) -> dict:
        entry = journal_service.update_entry(
            user_id,
            _to_int(payload.get("id"), "not_found"),
            title=payload.get("title", ""),
            content=payload.get("content", ""),
            mood=payload.get("mood", ""),
            mood_score=payload.get("mood_score"),
            mood_image_query=payload.get("mood_image_query"),
            collection_id=_collection_id(payload),
        )
        if entry is None:
            raise ValueError("not_found")
        return map_entry(entry)
