"""Journal domain event catalog."""

from __future__ import annotations

JOURNAL_ENTRY_CREATED = "journal.entry.created"
JOURNAL_ENTRY_UPDATED = "journal.entry.updated"
JOURNAL_ENTRY_DELETED = "journal.entry.deleted"
JOURNAL_COLLECTION_CREATED = "journal.collection.created"
JOURNAL_DRAFT_SAVED = "journal.draft.saved"

EVENT_CATALOG = {
    JOURNAL_ENTRY_CREATED: {
        "version": "v1",
        "payload": {
            "entry_id": "int",
            "user_id": "int",
            "mood": "str",
            "mood_score": "int",
            "collection_id": "int?",
            "created_at": "datetime",
        },
    },
    JOURNAL_ENTRY_UPDATED: {
        "version": "v1",
        "payload": {
            "entry_id": "int",
            "user_id": "int",
            "fields": "list[str]",
            "updated_at": "datetime",
        },
    },
    JOURNAL_ENTRY_DELETED: {
        "version": "v1",
        "payload": {"entry_id": "int", "user_id": "int"},
    },
    JOURNAL_COLLECTION_CREATED: {
        "version": "v1",
        "payload": {"collection_id": "int", "user_id": "int", "name": "str"},
    },
    JOURNAL_DRAFT_SAVED: {
        "version": "v1",
        "payload": {"user_id": "int", "cleared": "bool"},
    },
}

__all__ = [
    "EVENT_CATALOG",
    "JOURNAL_ENTRY_CREATED",
    "JOURNAL_ENTRY_UPDATED",
    "JOURNAL_ENTRY_DELETED",
    "JOURNAL_COLLECTION_CREATED",
    "JOURNAL_DRAFT_SAVED",
]
