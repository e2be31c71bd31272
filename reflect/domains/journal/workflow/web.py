"""Flask-side notifier and navigator for the authoring workflow."""

from __future__ import annotations

from typing import Optional

from flask import flash, url_for

from reflect.domains.journal.services.journal_service import UNORGANIZED


class FlashNotifier:
    """Notifications become flashed messages shown on the next rendered page."""

    def success(self, message: str) -> None:
        flash(message, "success")

    def error(self, message: str) -> None:
        flash(message, "danger")


class RedirectNavigator:
    """Records where the workflow wants to go; the controller issues the redirect."""

    def __init__(self) -> None:
        self.location: Optional[str] = None

    def to_collection(self, collection_id: Optional[str]) -> None:
        self.location = url_for("collection_pages.collection_view", collection_id=collection_id or UNORGANIZED)

    def to_entry(self, entry_id: str) -> None:
        self.location = url_for("journal_pages.entry_view", entry_id=entry_id)
