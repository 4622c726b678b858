"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

NOTIFICATION_TYPE_ORDER_CREATED: Final[str] = "ORDER_CREATED"
NOTIFICATION_TYPE_ORDER_UPDATE: Final[str] = "ORDER_UPDATE"
NOTIFICATION_TYPE_ORDER_CANCELLED: Final[str] = "ORDER_CANCELLED"
NOTIFICATION_TYPE_PAYMENT: Final[str] = "PAYMENT"
NOTIFICATION_TYPE_DELIVERY_ASSIGNED: Final[str] = "DELIVERY_ASSIGNED"

RELATED_ENTITY_ORDER: Final[str] = "ORDER"


@dataclass
class Notification:
    """Information message delivered to a specific user.

    Everything except ``is_read``, ``read_at`` and ``is_deleted`` is fixed once
    the notification has been persisted.
    """

    id: int | None
    recipient_id: int
    title: str
    message: str
    notification_type: str
    related_entity_type: str | None = None
    related_entity_id: int | None = None
    is_read: bool = False
    read_at: datetime | None = None
    is_deleted: bool = False
    created_at: datetime | None = None

    def belongs_to(self, user_id: int) -> bool:
        """Return ``True`` when ``user_id`` is the recipient of the notification."""

        return self.recipient_id == user_id


__all__ = [
    "Notification",
    "NOTIFICATION_TYPE_ORDER_CREATED",
    "NOTIFICATION_TYPE_ORDER_UPDATE",
    "NOTIFICATION_TYPE_ORDER_CANCELLED",
    "NOTIFICATION_TYPE_PAYMENT",
    "NOTIFICATION_TYPE_DELIVERY_ASSIGNED",
    "RELATED_ENTITY_ORDER",
]
