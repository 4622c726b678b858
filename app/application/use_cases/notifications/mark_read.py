"""Use cases for acknowledging notifications."""

from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from app.domain.entities import Notification
from app.infrastructure.notifications import EventDispatcher
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

from .create_notification import push_event
from .errors import NotificationAccessDeniedError, NotificationNotFoundError

logger = logging.getLogger(__name__)

NOTIFICATION_READ_EVENT = "notification_read"
NOTIFICATIONS_ALL_READ_EVENT = "notifications_all_read"


def mark_read(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    notification_id: int,
    requester_id: int,
) -> Notification:
    """Mark a single notification as read on behalf of its recipient.

    ``read_at`` is refreshed on every call, including for notifications that
    were already read.
    """

    repository = NotificationRepository(session)
    notification = repository.get(notification_id)
    if notification is None:
        raise NotificationNotFoundError("Notification not found")
    if not notification.belongs_to(requester_id):
        raise NotificationAccessDeniedError("Unauthorized access to notification")

    saved = repository.update(
        replace(notification, is_read=True, read_at=now_in_app_timezone())
    )

    push_event(
        dispatcher,
        requester_id,
        NOTIFICATION_READ_EVENT,
        {"notificationId": notification_id, "isRead": True},
    )
    return saved


def mark_all_read(
    session: Session, dispatcher: EventDispatcher, *, user_id: int
) -> int:
    """Mark every unread notification of ``user_id`` as read.

    All of them share the same ``read_at``. Returns the number of updated
    notifications.
    """

    repository = NotificationRepository(session)
    now = now_in_app_timezone()
    unread = [
        replace(notification, is_read=True, read_at=now)
        for notification in repository.list_unread_for_user(user_id)
    ]
    repository.update_many(unread)
    logger.info("Marked %s notifications as read for user %s", len(unread), user_id)

    push_event(dispatcher, user_id, NOTIFICATIONS_ALL_READ_EVENT, {"allRead": True})
    return len(unread)


__all__ = [
    "mark_read",
    "mark_all_read",
    "NOTIFICATION_READ_EVENT",
    "NOTIFICATIONS_ALL_READ_EVENT",
]
