"""Create/edit workflow for a single journal entry.

The workflow is UI-agnostic: page controllers feed it field values and user
intents, and it talks back through a ``Notifier`` and a ``Navigator``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import partial
from typing import Dict, List, Mapping, Optional, Protocol, Union

from pydantic import ValidationError

from reflect.core.utils.validation import field_errors
from reflect.domains.journal.moods import content_prompt, get_mood
from reflect.domains.journal.schemas.journal_schemas import JournalEntryForm
from reflect.domains.journal.workflow.actions import JournalActions
from reflect.domains.journal.workflow.dialog import CollectionDialog
from reflect.domains.journal.workflow.invoker import RemoteAction

logger = logging.getLogger(__name__)

NEW_COLLECTION = "new"
FIELDS = ("title", "content", "mood", "collection_id")
DRAFT_FIELDS = ("title", "content", "mood")


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class Navigator(Protocol):
    def to_collection(self, collection_id: Optional[str]) -> None: ...

    def to_entry(self, entry_id: str) -> None: ...


@dataclass(frozen=True)
class EditSource:
    """Form backed by an existing entry."""

    entry: Mapping


@dataclass(frozen=True)
class CreateSource:
    """Form backed by the user's draft, or nothing when there is none."""

    draft: Optional[Mapping] = None


InitSource = Union[EditSource, CreateSource]


def _text(value) -> str:
    return "" if value is None else str(value)


def empty_values() -> Dict[str, str]:
    return {name: "" for name in FIELDS}


def initial_values(source: InitSource) -> Dict[str, str]:
    """Field values for a freshly loaded form."""
    if isinstance(source, EditSource):
        return {name: _text(source.entry.get(name)) for name in FIELDS}
    draft = source.draft or {}
    values = {name: _text(draft.get(name)) for name in DRAFT_FIELDS}
    values["collection_id"] = ""
    return values


class EntryAuthoringWorkflow:
    def __init__(
        self,
        actions: JournalActions,
        user_id: int,
        *,
        notifier: Notifier,
        navigator: Navigator,
        edit_id: Optional[str] = None,
    ) -> None:
        self.user_id = user_id
        self.edit_id = _text(edit_id) or None
        self.notifier = notifier
        self.navigator = navigator

        self.values: Dict[str, str] = empty_values()
        self._baseline: Dict[str, str] = empty_values()
        self.errors: Dict[str, str] = {}
        self.collections: List[dict] = []
        self.existing_entry: Optional[dict] = None
        self.source: Optional[InitSource] = None
        self._initialized = False

        def invoker(fn, name):
            return RemoteAction(partial(fn, user_id), name=name, on_error=notifier.error)

        self.fetch_collections = invoker(actions.list_collections, "list_collections")
        self.fetch_entry = invoker(actions.get_entry, "get_entry")
        self.fetch_draft = invoker(actions.get_draft, "get_draft")
        self.save_draft_action = invoker(actions.save_draft, "save_draft")
        self.create_entry_action = invoker(actions.create_entry, "create_entry")
        self.update_entry_action = invoker(actions.update_entry, "update_entry")
        self.create_collection_action = invoker(actions.create_collection, "create_collection")
        self.dialog = CollectionDialog(self.create_collection_action, on_success=self._collection_created)

    # -- derived state -------------------------------------------------

    @property
    def is_edit_mode(self) -> bool:
        return self.edit_id is not None

    @property
    def is_dirty(self) -> bool:
        return self.values != self._baseline

    @property
    def is_loading(self) -> bool:
        return any(
            action.loading
            for action in (
                self.fetch_collections,
                self.fetch_entry,
                self.fetch_draft,
                self.save_draft_action,
                self.create_entry_action,
                self.update_entry_action,
                self.create_collection_action,
            )
        )

    @property
    def submit_action(self) -> RemoteAction:
        return self.update_entry_action if self.is_edit_mode else self.create_entry_action

    @property
    def can_submit(self) -> bool:
        return self.is_dirty and not self.submit_action.loading

    @property
    def can_save_draft(self) -> bool:
        return not self.is_edit_mode and self.is_dirty and not self.save_draft_action.loading

    @property
    def content_prompt(self) -> str:
        return content_prompt(self.values.get("mood"))

    # -- lifecycle -----------------------------------------------------

    def initialize(self) -> None:
        """Load collections plus the entry (edit) or draft (create), once per target."""
        if self._initialized:
            return
        self._initialized = True
        self.refresh_collections()

        if self.is_edit_mode:
            if self.fetch_entry.trigger(self.edit_id):
                self.existing_entry = self.fetch_entry.data
                self.source = EditSource(self.existing_entry)
        elif self.fetch_draft.trigger():
            self.source = CreateSource(self.fetch_draft.data)

        if self.source is not None:
            self.reset(initial_values(self.source))

    def reset(self, values: Mapping[str, str]) -> None:
        """Replace all fields and treat them as the unmodified baseline."""
        self.values = {name: _text(values.get(name)) for name in FIELDS}
        self._baseline = dict(self.values)
        self.errors = {}

    def refresh_collections(self) -> bool:
        if not self.fetch_collections.trigger():
            return False
        self.collections = list(self.fetch_collections.data or [])
        return True

    # -- field edits ---------------------------------------------------

    def set_field(self, name: str, value) -> None:
        if name not in FIELDS:
            raise KeyError(name)
        if name == "collection_id":
            self.select_collection(value)
            return
        self.values[name] = _text(value)

    def apply(self, data: Mapping) -> None:
        """Apply submitted values for the fields present in ``data``."""
        for name in FIELDS:
            if name in data:
                self.set_field(name, data[name])

    def select_collection(self, value) -> None:
        """The sentinel opens the dialog instead of changing the selection."""
        if value == NEW_COLLECTION:
            self.dialog.open()
            return
        self.values["collection_id"] = _text(value)

    # -- intents -------------------------------------------------------

    def submit(self) -> bool:
        try:
            form = JournalEntryForm.model_validate(self.values)
        except ValidationError as exc:
            self.errors = field_errors(exc)
            return False
        self.errors = {}

        mood = get_mood(form.mood)
        payload = {
            "title": form.title,
            "content": form.content,
            "mood": form.mood,
            "mood_score": mood.score,
            "mood_image_query": mood.image_query,
            "collection_id": form.collection_id,
        }
        if self.is_edit_mode:
            payload["id"] = self.edit_id

        action = self.submit_action
        if not action.trigger(payload):
            return False
        saved = action.data or {}

        if not self.is_edit_mode:
            # A published entry must not be offered again as a draft.
            self.save_draft_action.trigger("", "", "")

        self._baseline = dict(self.values)
        collection_id = saved.get("collection_id")
        self.navigator.to_collection(_text(collection_id) or None)
        self.notifier.success(f"Entry {'updated' if self.is_edit_mode else 'created'} successfully!")
        logger.info("Entry %s for user %s", "updated" if self.is_edit_mode else "created", self.user_id)
        return True

    def save_draft(self) -> bool:
        if self.is_edit_mode:
            self.notifier.error("Drafts are only available for new entries")
            return False
        if not self.is_dirty:
            self.notifier.error("No changes to save")
            return False
        if not self.save_draft_action.trigger(*(self.values[name] for name in DRAFT_FIELDS)):
            return False
        self._baseline = dict(self.values)
        self.notifier.success("Draft saved successfully")
        return True

    def create_collection(self, name: Optional[str]) -> bool:
        if not self.dialog.is_open:
            self.dialog.open()
        return self.dialog.submit(name)

    def cancel(self) -> bool:
        if not self.is_edit_mode:
            return False
        self.navigator.to_entry(self.edit_id)
        return True

    def _collection_created(self, collection: Optional[dict]) -> None:
        collection = collection or {}
        self.dialog.close()
        self.refresh_collections()
        self.values["collection_id"] = _text(collection.get("id"))
        self.notifier.success(f"Collection {collection.get('name', '')} created!")
