from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from reflect.core.outbox.models import OutboxMessage
from reflect.domains.journal.events import JOURNAL_ENTRY_CREATED
from reflect.domains.journal.models import JournalEntry
from reflect.domains.journal.services import collection_service, journal_service


def _prime_csrf(client) -> str:
    token = "test-csrf-token"
    with client.session_transaction() as sess:
        sess["_csrf_token"] = token
    return token


def _payload(**overrides) -> dict:
    data = {"title": "Day 1", "content": "<p>Great day</p>", "mood": "grateful"}
    data.update(overrides)
    return data


def test_create_journal_entry_success(app, client, user, auth_headers):
    headers = {**auth_headers, "X-CSRF-Token": _prime_csrf(client)}
    resp = client.post("/api/journal", json=_payload(mood_score=9), headers=headers)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["ok"] is True
    entry_id = body["entry"]["id"]
    assert body["entry"]["mood_image_query"] == "gratitude thankful"

    entry = JournalEntry.query.get(entry_id)
    assert entry.content == "<p>Great day</p>"
    outbox = OutboxMessage.query.filter_by(event_type=JOURNAL_ENTRY_CREATED, user_id=user.id).first()
    assert outbox.payload["entry_id"] == entry_id


def test_create_journal_entry_validation(client, auth_headers):
    resp = client.post("/api/journal", json=_payload(title="", mood="meh"), headers=auth_headers)
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "validation_error"
    assert {d["loc"][0] for d in body["details"]} == {"title", "mood"}


def test_create_journal_entry_mismatched_mood_score(client, auth_headers):
    resp = client.post("/api/journal", json=_payload(mood_score=1), headers=auth_headers)
    assert resp.status_code == 400


def test_create_journal_entry_unknown_collection(client, auth_headers):
    resp = client.post("/api/journal", json=_payload(collection_id=999), headers=auth_headers)
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "collection_not_found"


def test_requires_authentication(client):
    resp = client.get("/api/journal")
    assert resp.status_code == 401
    assert resp.get_json()["ok"] is False


def test_csrf_enforced_when_enabled(app, client, auth_headers):
    app.config["CSRF_ENABLED"] = True
    _prime_csrf(client)
    resp = client.post("/api/journal", json=_payload(), headers={**auth_headers, "X-CSRF-Token": "wrong"})
    assert resp.status_code == 403
    assert resp.get_json()["error"] == "csrf_failed"


def test_get_update_delete_entry(client, user, other_user, auth_headers):
    entry = journal_service.create_entry(user.id, title="Old", content="Text", mood="calm")
    collection = collection_service.create_collection(user.id, "Daily")

    resp = client.get(f"/api/journal/{entry.id}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.get_json()["entry"]["title"] == "Old"

    resp = client.patch(
        f"/api/journal/{entry.id}",
        json={"title": "New", "collection_id": collection.id},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    body = resp.get_json()["entry"]
    assert body["title"] == "New"
    assert body["mood"] == "calm"
    assert body["collection_id"] == collection.id

    resp = client.patch(f"/api/journal/{entry.id}", json={"collection_id": None}, headers=auth_headers)
    assert resp.get_json()["entry"]["collection_id"] is None

    resp = client.delete(f"/api/journal/{entry.id}", headers=auth_headers)
    assert resp.status_code == 200
    resp = client.get(f"/api/journal/{entry.id}", headers=auth_headers)
    assert resp.status_code == 404


def test_cannot_touch_other_users_entry(client, other_user, auth_headers):
    theirs = journal_service.create_entry(other_user.id, title="Private", content="x", mood="sad")

    assert client.get(f"/api/journal/{theirs.id}", headers=auth_headers).status_code == 404
    assert client.patch(f"/api/journal/{theirs.id}", json={"title": "Mine"}, headers=auth_headers).status_code == 404
    assert client.delete(f"/api/journal/{theirs.id}", headers=auth_headers).status_code == 404


def test_list_entries_with_filters(client, user, auth_headers):
    daily = collection_service.create_collection(user.id, "Daily")
    journal_service.create_entry(user.id, title="A", content="x", mood="happy", collection_id=daily.id)
    journal_service.create_entry(user.id, title="B", content="x", mood="sad")

    resp = client.get("/api/journal", headers=auth_headers)
    body = resp.get_json()
    assert body["total"] == 2
    assert body["pages"] == 1

    resp = client.get("/api/journal?unorganized=true", headers=auth_headers)
    assert [e["title"] for e in resp.get_json()["items"]] == ["B"]

    resp = client.get(f"/api/journal?collection_id={daily.id}", headers=auth_headers)
    assert [e["title"] for e in resp.get_json()["items"]] == ["A"]

    resp = client.get("/api/journal?per_page=1000", headers=auth_headers)
    assert resp.status_code == 400
