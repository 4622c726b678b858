"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import Settings, get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def _engine_options(settings: Settings) -> dict[str, object]:
    """Return ``create_engine`` keyword arguments for the configured backend."""

    url = make_url(settings.database_url)
    if url.get_backend_name() == "sqlite":
        # Sessions are used from the request threadpool and the heartbeat thread.
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.database_url, **_engine_options(settings))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have tables and the known roles exist."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported
    from app.infrastructure.repositories import RoleRepository

    Base.metadata.create_all(bind=engine, checkfirst=True)

    session = SessionLocal()
    try:
        created = RoleRepository(session).ensure_recognized_roles()
    finally:
        session.close()
    if created:
        logger.info("Seeded roles: %s", ", ".join(created))


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
