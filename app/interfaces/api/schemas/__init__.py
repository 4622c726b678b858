from .notification import (
    NotificationActionResponse,
    NotificationListResponse,
    NotificationRead,
    StreamStatusResponse,
)

__all__ = [
    "NotificationActionResponse",
    "NotificationListResponse",
    "NotificationRead",
    "StreamStatusResponse",
]
