"""Journal service tests: entry CRUD, listing filters, grouping and outbox events."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from reflect.core.outbox.models import OutboxMessage
from reflect.domains.journal.events import (
    JOURNAL_ENTRY_CREATED,
    JOURNAL_ENTRY_DELETED,
    JOURNAL_ENTRY_UPDATED,
)
from reflect.domains.journal.models import JournalEntry
from reflect.domains.journal.services import collection_service, journal_service
from reflect.domains.journal.services.journal_service import UNORGANIZED


def _entry(user_id, **overrides):
    data = {"title": "Morning", "content": "<p>Felt good</p>", "mood": "happy"}
    data.update(overrides)
    return journal_service.create_entry(user_id, **data)


# ==================== create_entry ====================


def test_create_entry_stores_catalog_mood_metadata(user):
    entry = _entry(user.id, title="  Padded  ")

    stored = JournalEntry.query.get(entry.id)
    assert stored.title == "Padded"
    assert stored.mood_score == 8
    assert stored.mood_image_query == "happy sunshine"
    assert stored.collection_id is None

    event = OutboxMessage.query.filter_by(event_type=JOURNAL_ENTRY_CREATED, user_id=user.id).one()
    assert event.payload["entry_id"] == entry.id
    assert event.payload["mood_score"] == 8


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"content": "   "},
        {"mood": "joyful"},
        {"mood_score": 3},
        {"mood_image_query": "rain window"},
    ],
)
def test_create_entry_validation_errors(user, overrides):
    with pytest.raises(ValueError, match="validation_error"):
        _entry(user.id, **overrides)
    assert JournalEntry.query.count() == 0


def test_create_entry_rejects_foreign_collection(user, other_user):
    foreign = collection_service.create_collection(other_user.id, "Theirs")
    with pytest.raises(ValueError, match="collection_not_found"):
        _entry(user.id, collection_id=foreign.id)


# ==================== update / delete / get ====================


def test_update_entry_changes_fields_and_mood(user):
    collection = collection_service.create_collection(user.id, "Daily")
    entry = _entry(user.id)

    updated = journal_service.update_entry(
        user.id, entry.id, title="Evening", mood="sad", collection_id=collection.id
    )
    assert updated.title == "Evening"
    assert updated.mood == "sad"
    assert updated.mood_score == 2
    assert updated.mood_image_query == "rain window"
    assert updated.collection_id == collection.id

    event = OutboxMessage.query.filter_by(event_type=JOURNAL_ENTRY_UPDATED).one()
    assert event.payload["fields"] == ["collection_id", "mood", "mood_image_query", "mood_score", "title"]


def test_update_entry_can_unorganize(user):
    collection = collection_service.create_collection(user.id, "Daily")
    entry = _entry(user.id, collection_id=collection.id)

    updated = journal_service.update_entry(user.id, entry.id, collection_id=None)
    assert updated.collection_id is None


def test_update_entry_missing_returns_none(user, other_user):
    entry = _entry(user.id)
    assert journal_service.update_entry(other_user.id, entry.id, title="Hijack") is None
    assert journal_service.update_entry(user.id, entry.id + 100, title="x") is None
    assert JournalEntry.query.get(entry.id).title == "Morning"


def test_update_entry_rejects_blank_title(user):
    entry = _entry(user.id)
    with pytest.raises(ValueError, match="validation_error"):
        journal_service.update_entry(user.id, entry.id, title="  ")


def test_delete_entry_is_scoped_to_owner(user, other_user):
    entry = _entry(user.id)
    assert journal_service.delete_entry(other_user.id, entry.id) is False
    assert journal_service.delete_entry(user.id, entry.id) is True
    assert journal_service.get_entry(user.id, entry.id) is None
    assert OutboxMessage.query.filter_by(event_type=JOURNAL_ENTRY_DELETED).count() == 1


# ==================== listing ====================


def test_list_entries_filters(user, other_user):
    daily = collection_service.create_collection(user.id, "Daily")
    _entry(user.id, title="Walk in the park", collection_id=daily.id)
    _entry(user.id, title="Rainy day", mood="sad")
    _entry(user.id, title="Quiet", content="Nothing about parks", mood="calm")
    _entry(other_user.id, title="Park too")

    entries, total = journal_service.list_entries(user.id)
    assert total == 3
    assert [e.title for e in entries] == ["Quiet", "Rainy day", "Walk in the park"]

    entries, total = journal_service.list_entries(user.id, collection_id=daily.id)
    assert [e.title for e in entries] == ["Walk in the park"]

    entries, total = journal_service.list_entries(user.id, unorganized=True)
    assert total == 2

    entries, _ = journal_service.list_entries(user.id, mood="sad")
    assert [e.title for e in entries] == ["Rainy day"]

    entries, _ = journal_service.list_entries(user.id, search_text="park")
    assert {e.title for e in entries} == {"Walk in the park", "Quiet"}


def test_list_entries_paginates(user):
    for i in range(5):
        _entry(user.id, title=f"Entry {i}")

    entries, total = journal_service.list_entries(user.id, page=2, per_page=2)
    assert total == 5
    assert [e.title for e in entries] == ["Entry 2", "Entry 1"]


def test_entries_by_collection_groups_unorganized(user):
    daily = collection_service.create_collection(user.id, "Daily")
    _entry(user.id, title="In daily", collection_id=daily.id)
    _entry(user.id, title="Loose")

    grouped = journal_service.entries_by_collection(user.id)
    assert set(grouped) == {str(daily.id), UNORGANIZED}
    assert [e.title for e in grouped[UNORGANIZED]] == ["Loose"]
