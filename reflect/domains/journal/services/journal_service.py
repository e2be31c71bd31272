"""Journal services: entry CRUD and listing with event emission."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from reflect.core.outbox import enqueue as enqueue_outbox
from reflect.domains.journal.events import (
    JOURNAL_ENTRY_CREATED,
    JOURNAL_ENTRY_DELETED,
    JOURNAL_ENTRY_UPDATED,
)
from reflect.domains.journal.models import Collection, JournalEntry
from reflect.domains.journal.moods import get_mood
from reflect.extensions import db

logger = logging.getLogger(__name__)

UNORGANIZED = "unorganized"
_UPDATABLE = ("title", "content", "mood", "collection_id")


def create_entry(
    user_id: int,
    *,
    title: str,
    content: str,
    mood: str,
    mood_score: Optional[int] = None,
    mood_image_query: Optional[str] = None,
    collection_id: Optional[int] = None,
) -> JournalEntry:
    title_norm = (title or "").strip()
    if not title_norm or not (content or "").strip():
        raise ValueError("validation_error")
    mood_id, score, image_query = _resolve_mood(mood, mood_score, mood_image_query)
    _ensure_collection(user_id, collection_id)

    entry = JournalEntry(
        user_id=user_id,
        title=title_norm,
        content=content,
        mood=mood_id,
        mood_score=score,
        mood_image_query=image_query,
        collection_id=collection_id,
    )
    db.session.add(entry)
    db.session.flush()
    enqueue_outbox(
        JOURNAL_ENTRY_CREATED,
        {
            "entry_id": entry.id,
            "user_id": user_id,
            "mood": entry.mood,
            "mood_score": entry.mood_score,
            "collection_id": entry.collection_id,
            "created_at": (entry.created_at or datetime.utcnow()).isoformat(),
        },
        user_id=user_id,
    )
    db.session.commit()
    logger.info("Created journal entry %s for user %s", entry.id, user_id)
    return entry


def update_entry(user_id: int, entry_id: int, **fields) -> Optional[JournalEntry]:
    entry = get_entry(user_id, entry_id)
    if not entry:
        return None

    changes = {key: fields[key] for key in _UPDATABLE if key in fields}
    if "title" in changes:
        changes["title"] = (changes["title"] or "").strip()
        if not changes["title"]:
            raise ValueError("validation_error")
    if "content" in changes and not (changes["content"] or "").strip():
        raise ValueError("validation_error")
    if "collection_id" in changes:
        _ensure_collection(user_id, changes["collection_id"])
    if "mood" in changes or "mood_score" in fields or "mood_image_query" in fields:
        mood_id, score, image_query = _resolve_mood(
            changes.get("mood", entry.mood),
            fields.get("mood_score"),
            fields.get("mood_image_query"),
        )
        changes.update(mood=mood_id, mood_score=score, mood_image_query=image_query)

    for key, value in changes.items():
        setattr(entry, key, value)
    db.session.flush()
    enqueue_outbox(
        JOURNAL_ENTRY_UPDATED,
        {
            "entry_id": entry.id,
            "user_id": user_id,
            "fields": sorted(changes),
            "updated_at": (entry.updated_at or datetime.utcnow()).isoformat(),
        },
        user_id=user_id,
    )
    db.session.commit()
    logger.info("Updated journal entry %s for user %s (%s)", entry.id, user_id, ", ".join(sorted(changes)))
    return entry


def delete_entry(user_id: int, entry_id: int) -> bool:
    entry = get_entry(user_id, entry_id)
    if not entry:
        return False
    db.session.delete(entry)
    enqueue_outbox(
        JOURNAL_ENTRY_DELETED,
        {"entry_id": entry_id, "user_id": user_id},
        user_id=user_id,
    )
    db.session.commit()
    return True


def get_entry(user_id: int, entry_id: int) -> Optional[JournalEntry]:
    return JournalEntry.query.filter_by(id=entry_id, user_id=user_id).first()


def list_entries(
    user_id: int,
    *,
    collection_id: Optional[int] = None,
    unorganized: bool = False,
    mood: Optional[str] = None,
    search_text: Optional[str] = None,
    page: int = 1,
    per_page: int = 20,
) -> Tuple[List[JournalEntry], int]:
    query = JournalEntry.query.filter_by(user_id=user_id)
    if unorganized:
        query = query.filter(JournalEntry.collection_id.is_(None))
    elif collection_id is not None:
        query = query.filter(JournalEntry.collection_id == collection_id)
    if mood:
        query = query.filter(JournalEntry.mood == mood)
    if search_text:
        like = f"%{search_text}%"
        query = query.filter(
            db.or_(
                JournalEntry.title.ilike(like),
                JournalEntry.content.ilike(like),
            )
        )
    total = query.count()
    entries = (
        query.order_by(JournalEntry.created_at.desc(), JournalEntry.id.desc())
        .offset((max(page, 1) - 1) * per_page)
        .limit(per_page)
        .all()
    )
    return entries, total


def entries_by_collection(user_id: int) -> Dict[str, List[JournalEntry]]:
    """Group the user's entries by collection id; entries without one go under "unorganized"."""
    grouped: Dict[str, List[JournalEntry]] = defaultdict(list)
    entries = (
        JournalEntry.query.filter_by(user_id=user_id)
        .order_by(JournalEntry.created_at.desc(), JournalEntry.id.desc())
        .all()
    )
    for entry in entries:
        key = str(entry.collection_id) if entry.collection_id is not None else UNORGANIZED
        grouped[key].append(entry)
    return dict(grouped)


def _resolve_mood(
    mood: Optional[str],
    mood_score: Optional[int],
    mood_image_query: Optional[str],
) -> Tuple[str, int, str]:
    """Catalog values are authoritative; supplied metadata must agree with them."""
    option = get_mood(mood)
    if option is None:
        raise ValueError("validation_error")
    if mood_score is not None and int(mood_score) != option.score:
        raise ValueError("validation_error")
    if mood_image_query is not None and mood_image_query != option.image_query:
        raise ValueError("validation_error")
    return option.id, option.score, option.image_query


def _ensure_collection(user_id: int, collection_id: Optional[int]) -> None:
    if collection_id is None:
        return
    exists = Collection.query.filter_by(id=collection_id, user_id=user_id).first()
    if not exists:
        raise ValueError("collection_not_found")
