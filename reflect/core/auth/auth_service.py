"""Authentication service layer."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from flask_jwt_extended import create_access_token, create_refresh_token, decode_token

from reflect.core.auth.events import AUTH_USER_REGISTERED
from reflect.core.auth.models import JWTBlocklist, SessionToken
from reflect.core.auth.schemas import RegisterRequest
from reflect.core.auth.security import hash_password, verify_password
from reflect.core.outbox import enqueue as enqueue_outbox
from reflect.core.users.models import User
from reflect.core.users.services import find_by_email
from reflect.extensions import db

logger = logging.getLogger(__name__)


def authenticate_user(email: str, password: str) -> Optional[User]:
    """Return the user if credentials are valid."""
    user = find_by_email(email)
    if not user or not user.is_active:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def issue_tokens(user: User) -> dict[str, str]:
    """Create access and refresh tokens for a user."""
    identity = str(user.id)
    access_token = create_access_token(identity=identity)
    refresh_token = create_refresh_token(identity=identity)

    # Persist refresh jti for revocation checks
    decoded_refresh = decode_token(refresh_token)
    expires = decoded_refresh.get("exp")
    db.session.add(
        SessionToken(
            user_id=user.id,
            jti=decoded_refresh.get("jti"),
            expires_at=datetime.utcfromtimestamp(expires) if expires else None,
        )
    )
    db.session.commit()
    return {"access_token": access_token, "refresh_token": refresh_token}


def revoke_refresh_token(jti: str) -> None:
    token = SessionToken.query.filter_by(jti=jti).first()
    if token:
        token.revoked = True
    db.session.add(JWTBlocklist(jti=jti))
    db.session.commit()


def is_token_revoked(jti: Optional[str]) -> bool:
    if not jti:
        return False
    return db.session.query(JWTBlocklist.id).filter_by(jti=jti).first() is not None


def register_user(payload: RegisterRequest, auto_issue_tokens: bool = False) -> dict:
    """Create a user and emit the registration event via the outbox."""
    if find_by_email(payload.email):
        raise ValueError("email_already_exists")

    user = User(
        email=payload.email,
        full_name=payload.full_name,
        password_hash=hash_password(payload.password),
    )
    db.session.add(user)
    db.session.flush()  # ensure user.id for events

    enqueue_outbox(
        AUTH_USER_REGISTERED,
        {"user_id": user.id, "email": user.email},
        user_id=user.id,
    )
    db.session.commit()
    logger.info("Registered user %s", user.id)

    tokens = issue_tokens(user) if auto_issue_tokens else {}
    return {"user": user, **tokens}
