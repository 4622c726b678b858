"""Public helpers for creating, reading and acknowledging notifications."""

from .create_notification import NOTIFICATION_EVENT, create_and_send
from .errors import (
    NotFoundError,
    NotificationAccessDeniedError,
    NotificationNotFoundError,
    NotificationRecipientNotFoundError,
)
from .events import (
    send_delivery_assigned,
    send_order_cancelled,
    send_order_created,
    send_order_status,
    send_payment,
)
from .list_notifications import list_for_user, unread_count
from .mark_read import (
    NOTIFICATION_READ_EVENT,
    NOTIFICATIONS_ALL_READ_EVENT,
    mark_all_read,
    mark_read,
)

__all__ = [
    "create_and_send",
    "send_order_status",
    "send_payment",
    "send_order_created",
    "send_order_cancelled",
    "send_delivery_assigned",
    "list_for_user",
    "unread_count",
    "mark_read",
    "mark_all_read",
    "NOTIFICATION_EVENT",
    "NOTIFICATION_READ_EVENT",
    "NOTIFICATIONS_ALL_READ_EVENT",
    "NotFoundError",
    "NotificationNotFoundError",
    "NotificationRecipientNotFoundError",
    "NotificationAccessDeniedError",
]
