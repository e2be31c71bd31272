from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from reflect.core.outbox.models import OutboxMessage
from reflect.domains.journal.events import JOURNAL_DRAFT_SAVED
from reflect.domains.journal.models import JournalDraft
from reflect.domains.journal.services import draft_service


def test_no_draft_until_first_save(user):
    assert draft_service.get_draft(user.id) is None


def test_save_draft_overwrites_single_row(user):
    draft_service.save_draft(user.id, title="Morning", content="Felt good", mood="happy")
    draft_service.save_draft(user.id, title="Evening", content="", mood="")

    assert JournalDraft.query.filter_by(user_id=user.id).count() == 1
    draft = draft_service.get_draft(user.id)
    assert (draft.title, draft.content, draft.mood) == ("Evening", "", "")
    assert draft.is_empty is False


def test_clear_draft_empties_fields(user):
    draft_service.save_draft(user.id, title="Morning", content="x", mood="sad")
    draft = draft_service.clear_draft(user.id)
    assert draft.is_empty is True

    events = OutboxMessage.query.filter_by(event_type=JOURNAL_DRAFT_SAVED).order_by(OutboxMessage.id).all()
    assert [e.payload["cleared"] for e in events] == [False, True]


def test_drafts_are_per_user(user, other_user):
    draft_service.save_draft(user.id, title="Mine")
    assert draft_service.get_draft(other_user.id) is None
