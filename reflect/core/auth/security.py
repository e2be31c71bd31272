"""Password hashing and session CSRF helpers."""

from __future__ import annotations

import secrets

from flask import request, session

from reflect.extensions import bcrypt

CSRF_TOKEN_SESSION_KEY = "_csrf_token"
CSRF_HEADER = "X-CSRF-Token"
CSRF_FORM_FIELD = "csrf_token"


def hash_password(plain_password: str) -> str:
    return bcrypt.generate_password_hash(plain_password).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.check_password_hash(hashed_password, plain_password)


def generate_csrf_token() -> str:
    """Return a stable CSRF token per-session."""
    token = session.get(CSRF_TOKEN_SESSION_KEY)
    if not token:
        token = secrets.token_hex(32)
        session[CSRF_TOKEN_SESSION_KEY] = token
    return token


def submitted_csrf_token() -> str:
    """Token sent by the client: API calls use the header, HTML forms a hidden field."""
    token = request.headers.get(CSRF_HEADER)
    if not token and request.form:
        token = request.form.get(CSRF_FORM_FIELD)
    return token or ""


def validate_csrf_token(token: str) -> bool:
    if not token:
        return False
    return secrets.compare_digest(token, session.get(CSRF_TOKEN_SESSION_KEY, ""))
