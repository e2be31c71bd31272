"""Entry authoring workflow and its collaborators."""

from reflect.domains.journal.workflow.actions import JournalActions, ServiceJournalActions
from reflect.domains.journal.workflow.authoring import (
    NEW_COLLECTION,
    CreateSource,
    EditSource,
    EntryAuthoringWorkflow,
    Navigator,
    Notifier,
    initial_values,
)
from reflect.domains.journal.workflow.dialog import CollectionDialog
from reflect.domains.journal.workflow.invoker import RemoteAction, describe_error

__all__ = [
    "NEW_COLLECTION",
    "CollectionDialog",
    "CreateSource",
    "EditSource",
    "EntryAuthoringWorkflow",
    "JournalActions",
    "Navigator",
    "Notifier",
    "RemoteAction",
    "ServiceJournalActions",
    "describe_error",
    "initial_values",
]
