"""Utility helpers to push events to notification stream subscribers."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable

from app.domain.entities import Notification

from .manager import ConnectionRegistry
from .streams import StreamSendError

logger = logging.getLogger(__name__)


class DispatchResult(str, Enum):
    """Outcome of a single :meth:`EventDispatcher.dispatch` call."""

    DELIVERED = "delivered"
    DROPPED = "dropped"
    FAILED = "failed"


class EventDispatcher:
    """Best-effort delivery of named events to a user's live stream.

    Nothing is buffered for users without a stream and nothing is retried.
    """

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    def dispatch(self, user_id: int, event: str, payload: Any) -> DispatchResult:
        """Write ``event`` to the stream of ``user_id`` if one is open."""

        stream = self._registry.get(user_id)
        if stream is None:
            logger.debug("No active event stream for user %s", user_id)
            return DispatchResult.DROPPED

        try:
            stream.send(event, payload)
        except StreamSendError as exc:
            logger.warning(
                "Failed to send %s event to user %s: %s", event, user_id, exc
            )
            stream.fail(exc)
            return DispatchResult.FAILED

        logger.debug("Sent %s event to user %s", event, user_id)
        return DispatchResult.DELIVERED

    def dispatch_many(
        self,
        user_ids: Iterable[int],
        event: str,
        payload: Any,
    ) -> dict[int, DispatchResult]:
        """Send ``event`` to each of ``user_ids`` independently."""

        results: dict[int, DispatchResult] = {}
        for user_id in user_ids:
            if not user_id or user_id in results:
                continue
            results[user_id] = self.dispatch(user_id, event, payload)
        return results


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the ``notification`` event payload for ``notification``."""

    return {
        "id": notification.id,
        "title": notification.title,
        "message": notification.message,
        "type": notification.notification_type,
        "relatedEntityType": notification.related_entity_type,
        "relatedEntityId": notification.related_entity_id,
        "isRead": notification.is_read,
        "createdAt": notification.created_at.isoformat()
        if notification.created_at
        else None,
    }


__all__ = ["DispatchResult", "EventDispatcher", "serialize_notification"]
