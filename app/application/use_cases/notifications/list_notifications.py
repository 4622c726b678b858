"""Use cases for reading a user's notifications."""

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.repositories import NotificationRepository


def list_for_user(
    session: Session, user_id: int, *, limit: int | None = None
) -> list[Notification]:
    """Return the user's notifications, newest first."""

    return list(NotificationRepository(session).list_for_user(user_id, limit=limit))


def unread_count(session: Session, user_id: int) -> int:
    return NotificationRepository(session).count_unread_for_user(user_id)
