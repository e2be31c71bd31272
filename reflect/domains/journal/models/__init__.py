"""Journal domain models."""

from reflect.domains.journal.models.collection import Collection
from reflect.domains.journal.models.journal_draft import JournalDraft
from reflect.domains.journal.models.journal_entry import JournalEntry

__all__ = ["Collection", "JournalDraft", "JournalEntry"]
