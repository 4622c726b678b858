"""Use case for persisting a notification and pushing it to its recipient."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.notifications import EventDispatcher, serialize_notification
from app.infrastructure.repositories import NotificationRepository, UserRepository
from app.utils import now_in_app_timezone

from .errors import NotificationRecipientNotFoundError

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"


def create_and_send(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    recipient_id: int,
    title: str,
    message: str,
    notification_type: str,
    related_entity_type: str | None = None,
    related_entity_id: int | None = None,
) -> Notification:
    """Store a new unread notification and push it over the recipient's stream.

    The returned notification only depends on the database write; whatever
    happens while pushing it is logged and ignored.
    """

    if not UserRepository(session).exists(recipient_id):
        raise NotificationRecipientNotFoundError(f"User not found: {recipient_id}")

    notification = Notification(
        id=None,
        recipient_id=recipient_id,
        title=title,
        message=message,
        notification_type=notification_type,
        related_entity_type=related_entity_type,
        related_entity_id=related_entity_id,
        is_read=False,
        read_at=None,
        is_deleted=False,
        created_at=now_in_app_timezone(),
    )
    saved = NotificationRepository(session).create(notification)

    push_event(dispatcher, recipient_id, NOTIFICATION_EVENT, serialize_notification(saved))
    logger.info("Notification %s stored for user %s: %s", saved.id, recipient_id, title)
    return saved


def push_event(
    dispatcher: EventDispatcher, user_id: int, event: str, payload: Any
) -> None:
    """Dispatch ``event`` without letting any delivery problem escape."""

    try:
        dispatcher.dispatch(user_id, event, payload)
    except Exception:
        logger.exception("Failed to push %s event to user %s", event, user_id)


__all__ = ["create_and_send", "push_event", "NOTIFICATION_EVENT"]
