"""Tracks loading/data/error around one boundary call."""

from __future__ import annotations

import logging
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

ERROR_MESSAGES = {
    "not_found": "Entry not found",
    "collection_not_found": "Collection not found",
    "collection_exists": "A collection with that name already exists",
    "validation_error": "Please check the highlighted fields",
}
DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again."


def describe_error(exc: BaseException) -> str:
    """Human message for a failed call; services raise ValueError with a code.

    Anything else gets the generic message so driver text never reaches users.
    """
    if isinstance(exc, ValueError):
        return ERROR_MESSAGES.get(str(exc), DEFAULT_ERROR_MESSAGE)
    return DEFAULT_ERROR_MESSAGE


class RemoteAction(Generic[T]):
    """Wrap a boundary operation and remember the outcome of its last call.

    ``trigger`` refuses to start while a previous call is still loading so the
    same operation is never dispatched twice at once. Failures are stored in
    ``error`` and handed to ``on_error``; ``data`` keeps the last successful
    result.
    """

    def __init__(
        self,
        fn: Callable[..., T],
        *,
        name: Optional[str] = None,
        on_error: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._fn = fn
        self.name = name or getattr(fn, "__name__", "action")
        self._on_error = on_error
        self.loading = False
        self.data: Optional[T] = None
        self.error: Optional[Exception] = None
        self.calls = 0

    def trigger(self, *args, **kwargs) -> bool:
        """Run the call; True when it completed without raising."""
        if self.loading:
            logger.warning("%s is already in flight; ignoring trigger", self.name)
            return False
        self.loading = True
        self.error = None
        self.calls += 1
        try:
            self.data = self._fn(*args, **kwargs)
        except Exception as exc:
            self.error = exc
            logger.warning("%s failed: %s", self.name, exc)
            if self._on_error is not None:
                self._on_error(describe_error(exc))
            return False
        finally:
            self.loading = False
        return True
