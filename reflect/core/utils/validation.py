"""Validation error helpers shared by controllers and forms."""

from __future__ import annotations

from typing import Dict, List

from pydantic import ValidationError


def jsonable_errors(exc: ValidationError) -> List[dict]:
    """pydantic error list safe for jsonify (ctx values may hold exceptions)."""
    errors = exc.errors()
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        err.pop("url", None)
    return errors


def field_errors(exc: ValidationError) -> Dict[str, str]:
    """Collapse a ValidationError into one message per top-level field."""
    messages: Dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("__root__",)
        field = str(loc[0])
        if field in messages:
            continue
        message = err.get("msg", "Invalid value")
        # Custom validators raise ValueError; pydantic prefixes the message.
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages[field] = message
    return messages
