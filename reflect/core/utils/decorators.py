"""Reusable decorators for controllers."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import current_app, jsonify

from reflect.core.auth.security import submitted_csrf_token, validate_csrf_token

F = TypeVar("F", bound=Callable)


def csrf_protected(fn: F) -> F:
    """Validate the session CSRF token from the X-CSRF-Token header or form field."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        if not current_app.config.get("CSRF_ENABLED", True):
            return fn(*args, **kwargs)
        if not validate_csrf_token(submitted_csrf_token()):
            return jsonify({"ok": False, "error": "csrf_failed"}), 403
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
