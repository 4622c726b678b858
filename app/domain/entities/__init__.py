"""Domain entities exposed by the application."""

from .notification import (
    NOTIFICATION_TYPE_DELIVERY_ASSIGNED,
    NOTIFICATION_TYPE_ORDER_CANCELLED,
    NOTIFICATION_TYPE_ORDER_CREATED,
    NOTIFICATION_TYPE_ORDER_UPDATE,
    NOTIFICATION_TYPE_PAYMENT,
    RELATED_ENTITY_ORDER,
    Notification,
)
from .role import (
    RECOGNIZED_ROLES,
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    ROLE_DELIVERY,
    ROLE_PROVIDER,
    Role,
)
from .user import User

__all__ = [
    "Notification",
    "NOTIFICATION_TYPE_ORDER_CREATED",
    "NOTIFICATION_TYPE_ORDER_UPDATE",
    "NOTIFICATION_TYPE_ORDER_CANCELLED",
    "NOTIFICATION_TYPE_PAYMENT",
    "NOTIFICATION_TYPE_DELIVERY_ASSIGNED",
    "RELATED_ENTITY_ORDER",
    "Role",
    "ROLE_CUSTOMER",
    "ROLE_PROVIDER",
    "ROLE_DELIVERY",
    "ROLE_ADMIN",
    "RECOGNIZED_ROLES",
    "User",
]
