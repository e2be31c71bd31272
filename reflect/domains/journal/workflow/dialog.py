"""Modal form that names and creates a collection."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from pydantic import ValidationError

from reflect.core.utils.validation import field_errors
from reflect.domains.journal.schemas.journal_schemas import CollectionCreate
from reflect.domains.journal.workflow.invoker import RemoteAction


class CollectionDialog:
    """Collects a collection name and runs the create call.

    The dialog reports success through ``on_success``; closing it, navigating
    and notifying are left to the caller.
    """

    def __init__(self, action: RemoteAction, on_success: Optional[Callable[[dict], None]] = None) -> None:
        self._action = action
        self._on_success = on_success
        self.is_open = False
        self.name = ""
        self.errors: Dict[str, str] = {}

    @property
    def loading(self) -> bool:
        return self._action.loading

    def open(self) -> None:
        self.is_open = True
        self.name = ""
        self.errors = {}

    def close(self) -> None:
        self.is_open = False
        self.errors = {}

    def submit(self, name: Optional[str]) -> bool:
        self.name = name or ""
        try:
            data = CollectionCreate.model_validate({"name": name})
        except ValidationError as exc:
            self.errors = field_errors(exc)
            return False
        self.errors = {}
        if not self._action.trigger(data.name):
            return False
        if self._on_success is not None:
            self._on_success(self._action.data)
        return True
