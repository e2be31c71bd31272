import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reflect import create_app
from reflect.core.auth.auth_service import issue_tokens
from reflect.core.users.schemas import UserCreateRequest
from reflect.core.users.services import create_user
from reflect.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


@pytest.fixture()
def app():
    """
    Create a per-test app backed by its own in-memory SQLite database.

    Every app gets a fresh engine, so schema and rows never leak between tests.
    """
    app = create_app("testing")
    ctx = app.app_context()
    ctx.push()
    db.create_all()
    try:
        yield app
    finally:
        db.session.remove()
        db.drop_all()
        ctx.pop()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def user(app):
    return create_user(
        UserCreateRequest(
            email="writer@example.com",
            password="secret123",
            full_name="Writer",
        )
    )


@pytest.fixture()
def other_user(app):
    return create_user(
        UserCreateRequest(
            email="someone-else@example.com",
            password="secret123",
            full_name="Someone Else",
        )
    )


@pytest.fixture()
def auth_headers(user):
    tokens = issue_tokens(user)
    return {"Authorization": f"Bearer {tokens['access_token']}"}
