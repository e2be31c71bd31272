"""Draft services: one overwritable unpublished entry per user."""

from __future__ import annotations

import logging
from typing import Optional

from reflect.core.outbox import enqueue as enqueue_outbox
from reflect.domains.journal.events import JOURNAL_DRAFT_SAVED
from reflect.domains.journal.models import JournalDraft
from reflect.extensions import db

logger = logging.getLogger(__name__)


def get_draft(user_id: int) -> Optional[JournalDraft]:
    return JournalDraft.query.filter_by(user_id=user_id).first()


def save_draft(user_id: int, *, title: str = "", content: str = "", mood: str = "") -> JournalDraft:
    """Overwrite the user's draft, creating it on first save."""
    draft = get_draft(user_id)
    if draft is None:
        draft = JournalDraft(user_id=user_id)
        db.session.add(draft)
    draft.title = title or ""
    draft.content = content or ""
    draft.mood = mood or ""
    db.session.flush()
    enqueue_outbox(
        JOURNAL_DRAFT_SAVED,
        {"user_id": user_id, "cleared": draft.is_empty},
        user_id=user_id,
    )
    db.session.commit()
    logger.debug("Saved draft for user %s (empty=%s)", user_id, draft.is_empty)
    return draft


def clear_draft(user_id: int) -> JournalDraft:
    return save_draft(user_id, title="", content="", mood="")
