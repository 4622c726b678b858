"""Shared fixtures for the notification test-suite."""

from __future__ import annotations

import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "notifications_api_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.domain.entities import User  # noqa: E402
from app.infrastructure import models  # noqa: E402,F401
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.notifications import build_realtime  # noqa: E402
from app.infrastructure.repositories import RoleRepository, UserRepository  # noqa: E402
from app.infrastructure.security import create_user_token  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Return a factory inserting users with a given role."""

    counter = iter(range(1, 10_000))

    def _make_user(
        *, role: str = "CUSTOMER", email: str | None = None, is_active: bool = True
    ) -> User:
        role_entity = RoleRepository(session).get_by_alias(role)
        assert role_entity is not None
        index = next(counter)
        return UserRepository(session).create(
            User(
                id=None,
                role=role_entity,
                name=f"User {index}",
                email=email or f"user{index}@example.com",
                created_at=None,
                is_active=is_active,
                deleted=False,
            )
        )

    return _make_user


@pytest.fixture()
def realtime():
    components = build_realtime(
        max_lifetime=60,
        heartbeat_interval=30,
        backlog_size=10,
    )
    yield components
    components.shutdown()


@pytest.fixture()
def registry(realtime):
    return realtime.registry


@pytest.fixture()
def dispatcher(realtime):
    return realtime.dispatcher


@pytest.fixture()
def auth_headers():
    """Return a helper building the bearer header for a user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user.email)}"}

    return _headers
