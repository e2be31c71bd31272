"""User service layer."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func

from reflect.core.auth.security import hash_password
from reflect.core.users.models import User
from reflect.core.users.schemas import UserCreateRequest
from reflect.extensions import db


def get_user(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def find_by_email(email: str) -> Optional[User]:
    normalized = (email or "").strip().lower()
    return User.query.filter(func.lower(User.email) == normalized).first()


def create_user(payload: UserCreateRequest) -> User:
    user = User(
        email=payload.email.strip().lower(),
        full_name=payload.full_name,
        password_hash=hash_password(payload.password),
    )
    db.session.add(user)
    db.session.commit()
    return user
