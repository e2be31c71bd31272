"""Journal mappers for DTO responses."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from reflect.domains.journal.models import Collection, JournalDraft, JournalEntry
from reflect.domains.journal.moods import MoodOption
from reflect.domains.journal.schemas.journal_schemas import (
    CollectionResponse,
    DraftResponse,
    JournalEntryResponse,
    MoodResponse,
)


def _iso(value: Optional[datetime]) -> str:
    return value.isoformat() if value else ""


def map_entry(entry: JournalEntry) -> dict:
    return JournalEntryResponse(
        id=entry.id,
        title=entry.title,
        content=entry.content,
        mood=entry.mood,
        mood_score=entry.mood_score,
        mood_image_query=entry.mood_image_query,
        collection_id=entry.collection_id,
        created_at=_iso(entry.created_at),
        updated_at=_iso(entry.updated_at),
    ).model_dump()


def map_collection(collection: Collection) -> dict:
    return CollectionResponse(
        id=collection.id,
        name=collection.name,
        created_at=_iso(collection.created_at),
    ).model_dump()


def map_draft(draft: JournalDraft) -> dict:
    return DraftResponse(
        title=draft.title or "",
        content=draft.content or "",
        mood=draft.mood or "",
        updated_at=_iso(draft.updated_at) or None,
    ).model_dump()


def map_mood(mood: MoodOption) -> dict:
    return MoodResponse(**mood.to_dict()).model_dump()
