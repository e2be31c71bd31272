"""Server-rendered authoring pages driven by the entry workflow."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from reflect.domains.journal.models import Collection, JournalEntry
from reflect.domains.journal.services import collection_service, draft_service, journal_service


def _form(**overrides) -> dict:
    data = {"title": "Morning", "content": "<p>Felt good</p>", "mood": "happy", "collection_id": ""}
    data.update(overrides)
    return data


# ==================== Create mode ====================


def test_write_page_prefills_draft(client, user, auth_headers):
    draft_service.save_draft(user.id, title="Half written", content="", mood="tired")
    resp = client.get("/journal/write", headers=auth_headers)
    assert resp.status_code == 200
    assert b'value="Half written"' in resp.data
    assert b"What drained your energy today?" in resp.data


def test_publish_creates_entry_and_clears_draft(client, user, auth_headers):
    draft_service.save_draft(user.id, title="Morning", content="", mood="")
    resp = client.post("/journal/write", data={**_form(), "action": "publish"}, headers=auth_headers)

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/collection/unorganized")
    entry = JournalEntry.query.filter_by(user_id=user.id).one()
    assert entry.mood_score == 8
    assert draft_service.get_draft(user.id).is_empty is True

    page = client.get(resp.headers["Location"], headers=auth_headers)
    assert b"Entry created successfully!" in page.data
    assert b"Morning" in page.data


def test_publish_into_collection_redirects_there(client, user, auth_headers):
    daily = collection_service.create_collection(user.id, "Daily")
    resp = client.post(
        "/journal/write",
        data={**_form(collection_id=str(daily.id)), "action": "publish"},
        headers=auth_headers,
    )
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith(f"/collection/{daily.id}")


def test_publish_with_missing_fields_rerenders_errors(client, user, auth_headers):
    resp = client.post(
        "/journal/write",
        data={**_form(title="", mood=""), "action": "publish"},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert b"Title is required" in resp.data
    assert b"Mood is required" in resp.data
    assert JournalEntry.query.count() == 0


def test_save_draft_from_form(client, user, auth_headers):
    resp = client.post(
        "/journal/write",
        data={**_form(content="", mood=""), "action": "draft"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert b"Draft saved successfully" in resp.data
    draft = draft_service.get_draft(user.id)
    assert (draft.title, draft.content, draft.mood) == ("Morning", "", "")


def test_save_draft_without_changes(client, user, auth_headers):
    draft_service.save_draft(user.id, title="Same", content="", mood="")
    resp = client.post(
        "/journal/write",
        data={"title": "Same", "content": "", "mood": "", "collection_id": "", "action": "draft"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert b"No changes to save" in resp.data


def test_unknown_action_is_rejected(client, auth_headers):
    resp = client.post("/journal/write", data={**_form(), "action": "explode"}, headers=auth_headers)
    assert resp.status_code == 400


# ==================== Inline collection flow ====================


def test_new_collection_sentinel_shows_dialog(client, user, auth_headers):
    resp = client.post(
        "/journal/write",
        data={**_form(collection_id="new"), "action": "publish"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert b"<dialog open" in resp.data
    assert JournalEntry.query.count() == 0


def test_inline_collection_is_created_and_selected(client, user, auth_headers):
    resp = client.post(
        "/journal/write/collection",
        data={**_form(collection_id="new"), "collection_name": "Travel"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    collection = Collection.query.filter_by(user_id=user.id, name="Travel").one()
    assert f'value="{collection.id}" selected'.encode() in resp.data
    assert b"Collection Travel created!" in resp.data
    # Typed values survive the side flow.
    assert b'value="Morning"' in resp.data
    assert b"<dialog open" not in resp.data


def test_inline_collection_requires_name(client, user, auth_headers):
    resp = client.post(
        "/journal/write/collection",
        data={**_form(), "collection_name": "  "},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert b"Name is required" in resp.data
    assert Collection.query.count() == 0


# ==================== Edit mode ====================


def test_edit_page_prefills_entry(client, user, auth_headers):
    entry = journal_service.create_entry(user.id, title="Old title", content="Text", mood="calm")
    resp = client.get(f"/journal/write?edit={entry.id}", headers=auth_headers)
    assert resp.status_code == 200
    assert b'value="Old title"' in resp.data
    assert b"Update entry" in resp.data


def test_edit_publish_updates_entry(client, user, auth_headers):
    daily = collection_service.create_collection(user.id, "Daily")
    entry = journal_service.create_entry(
        user.id, title="Old", content="Text", mood="calm", collection_id=daily.id
    )
    draft_service.save_draft(user.id, title="Untouched", content="", mood="")

    resp = client.post(
        f"/journal/write?edit={entry.id}",
        data={"title": "New", "content": "Text", "mood": "calm", "collection_id": str(daily.id), "action": "publish"},
        headers=auth_headers,
    )
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith(f"/collection/{daily.id}")
    assert JournalEntry.query.get(entry.id).title == "New"
    assert draft_service.get_draft(user.id).title == "Untouched"


def test_edit_cancel_goes_to_entry(client, user, auth_headers):
    entry = journal_service.create_entry(user.id, title="Old", content="Text", mood="calm")
    resp = client.post(
        f"/journal/write?edit={entry.id}",
        data={"title": "Changed", "action": "cancel"},
        headers=auth_headers,
    )
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith(f"/journal/{entry.id}")
    assert JournalEntry.query.get(entry.id).title == "Old"


def test_edit_draft_is_refused(client, user, auth_headers):
    entry = journal_service.create_entry(user.id, title="Old", content="Text", mood="calm")
    resp = client.post(
        f"/journal/write?edit={entry.id}",
        data={"title": "Changed", "content": "Text", "mood": "calm", "action": "draft"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert b"Drafts are only available for new entries" in resp.data
    assert draft_service.get_draft(user.id) is None


def test_edit_missing_entry_is_not_found(client, other_user, auth_headers):
    theirs = journal_service.create_entry(other_user.id, title="Private", content="x", mood="sad")
    resp = client.get(f"/journal/write?edit={theirs.id}", headers=auth_headers)
    assert resp.status_code == 404
    assert b"Entry not found" in resp.data


# ==================== Views ====================


def test_entry_view_strips_markup(client, user, auth_headers):
    entry = journal_service.create_entry(
        user.id, title="Shown", content="<p>Hello <script>x()</script></p>", mood="happy"
    )
    resp = client.get(f"/journal/{entry.id}", headers=auth_headers)
    assert resp.status_code == 200
    assert b"Shown" in resp.data
    assert b"<script>x()" not in resp.data
    assert f"/journal/write?edit={entry.id}".encode() in resp.data


def test_delete_entry_from_page(client, user, auth_headers):
    entry = journal_service.create_entry(user.id, title="Bye", content="x", mood="sad")
    resp = client.post(f"/journal/{entry.id}/delete", headers=auth_headers)
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/collection/unorganized")
    assert journal_service.get_entry(user.id, entry.id) is None


def test_collection_view(client, user, other_user, auth_headers):
    daily = collection_service.create_collection(user.id, "Daily")
    journal_service.create_entry(user.id, title="Inside", content="x", mood="calm", collection_id=daily.id)
    theirs = collection_service.create_collection(other_user.id, "Theirs")

    resp = client.get(f"/collection/{daily.id}", headers=auth_headers)
    assert resp.status_code == 200
    assert b"Inside" in resp.data

    assert client.get(f"/collection/{theirs.id}", headers=auth_headers).status_code == 404
    assert client.get("/collection/bogus", headers=auth_headers).status_code == 404
    assert client.get("/collection/unorganized", headers=auth_headers).status_code == 200


def test_dashboard_groups_and_creates_collections(client, user, auth_headers):
    journal_service.create_entry(user.id, title="Loose thought", content="x", mood="neutral")
    resp = client.get("/dashboard", headers=auth_headers)
    assert resp.status_code == 200
    assert b"Unorganized" in resp.data
    assert b"Loose thought" in resp.data

    resp = client.post("/dashboard/collections", data={"name": "Dreams"}, headers=auth_headers)
    assert resp.status_code == 302
    assert collection_service.list_collections(user.id)[0].name == "Dreams"

    resp = client.post("/dashboard/collections", data={"name": "dreams"}, headers=auth_headers)
    page = client.get(resp.headers["Location"], headers=auth_headers)
    assert b"A collection with that name already exists" in page.data


def test_pages_redirect_to_login_without_token(client):
    resp = client.get("/dashboard")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/account/login")


# ==================== Input checks ====================


def test_draft_with_unknown_mood_is_not_stored(client, user, auth_headers):
    resp = client.post(
        "/journal/write",
        data={**_form(mood="bogus"), "action": "draft"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert b"Please check the highlighted fields" in resp.data
    assert draft_service.get_draft(user.id) is None


def test_dashboard_collection_name_too_long(client, user, auth_headers):
    resp = client.post("/dashboard/collections", data={"name": "x" * 150}, headers=auth_headers)
    assert resp.status_code == 302
    assert Collection.query.count() == 0
    page = client.get(resp.headers["Location"], headers=auth_headers)
    assert b"Name must be at most 100 characters" in page.data


def test_dashboard_collection_name_required(client, user, auth_headers):
    resp = client.post("/dashboard/collections", data={"name": "   "}, headers=auth_headers)
    page = client.get(resp.headers["Location"], headers=auth_headers)
    assert b"Name is required" in page.data
    assert Collection.query.count() == 0


def test_inline_collection_with_missing_edit_target(client, user, other_user, auth_headers):
    theirs = journal_service.create_entry(other_user.id, title="Private", content="x", mood="sad")
    for edit_id in ("999", str(theirs.id)):
        resp = client.post(
            f"/journal/write/collection?edit={edit_id}",
            data={**_form(), "collection_name": "Travel"},
            headers=auth_headers,
        )
        assert resp.status_code == 404
    assert collection_service.list_collections(user.id) == []
