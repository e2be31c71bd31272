"""Auth domain event catalog."""

from __future__ import annotations

AUTH_USER_REGISTERED = "auth.user.registered"

EVENT_CATALOG = {
    AUTH_USER_REGISTERED: {
        "version": "v1",
        "payload": {"user_id": "int", "email": "str"},
    },
}

__all__ = ["EVENT_CATALOG", "AUTH_USER_REGISTERED"]
