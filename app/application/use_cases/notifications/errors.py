"""Errors raised by the notification use cases."""


class NotFoundError(ValueError):
    """Raised when a requested resource does not exist."""


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification id is unknown."""


class NotificationRecipientNotFoundError(NotFoundError):
    """Raised when a notification targets a user that does not exist."""


class NotificationAccessDeniedError(PermissionError):
    """Raised when a user acts on a notification addressed to someone else."""


__all__ = [
    "NotFoundError",
    "NotificationNotFoundError",
    "NotificationRecipientNotFoundError",
    "NotificationAccessDeniedError",
]
