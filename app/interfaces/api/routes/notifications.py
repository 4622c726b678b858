"""Endpoints and event stream for realtime notifications."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotFoundError,
    NotificationAccessDeniedError,
    list_for_user,
    mark_all_read,
    mark_read,
    unread_count,
)
from app.domain.entities import Notification, User
from app.infrastructure.database import get_db
from app.infrastructure.notifications import (
    EventDispatcher,
    RealtimeNotifications,
    StreamConnectionError,
    StreamSendError,
    encode_event,
)
from app.interfaces.api.dependencies import (
    get_dispatcher,
    get_realtime,
    require_recognized_role,
)
from app.interfaces.api.schemas import (
    NotificationActionResponse,
    NotificationListResponse,
    NotificationRead,
    StreamStatusResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

EVENT_STREAM_MEDIA_TYPE = "text/event-stream"
EVENT_STREAM_HEADERS = {"Cache-Control": "no-cache", "X-Accel-Buffering": "no"}
UNREAD_COUNT_EVENT = "unread_count"


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    limit: int | None = Query(None, gt=0, description="Return only the newest N"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_recognized_role),
) -> NotificationListResponse:
    """Return the user's notifications, newest first, and the unread total."""

    notifications = list_for_user(db, current_user.id, limit=limit)
    return NotificationListResponse(
        notifications=[_to_read_model(n) for n in notifications],
        unread_count=unread_count(db, current_user.id),
    )


@router.put(
    "/read-all",
    response_model=NotificationActionResponse,
    response_model_exclude_none=True,
)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(require_recognized_role),
) -> NotificationActionResponse:
    updated = mark_all_read(db, dispatcher, user_id=current_user.id)
    return NotificationActionResponse(
        message="All notifications marked as read", updated=updated
    )


@router.put(
    "/{notification_id}/read",
    response_model=NotificationActionResponse,
    response_model_exclude_none=True,
)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
    current_user: User = Depends(require_recognized_role),
) -> NotificationActionResponse:
    try:
        mark_read(
            db,
            dispatcher,
            notification_id=notification_id,
            requester_id=current_user.id,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except NotificationAccessDeniedError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    return NotificationActionResponse(message="Notification marked as read")


@router.get("/stream", response_class=StreamingResponse)
def stream_notifications(
    db: Session = Depends(get_db),
    realtime: RealtimeNotifications = Depends(get_realtime),
    current_user: User = Depends(require_recognized_role),
) -> StreamingResponse:
    """Open the server-sent event stream of the authenticated user.

    Opening a stream replaces any stream the user already had.
    """

    logger.info("Event stream requested by user %s", current_user.id)
    pending = unread_count(db, current_user.id)
    # The stream outlives the request scope; do not hold a pooled connection.
    db.close()

    try:
        stream = realtime.registry.open(current_user.id)
    except StreamConnectionError as exc:
        logger.error("Failed to create event stream for user %s: %s", current_user.id, exc)
        return StreamingResponse(
            _error_frames(str(exc)),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            media_type=EVENT_STREAM_MEDIA_TYPE,
            headers=EVENT_STREAM_HEADERS,
        )

    try:
        stream.send(UNREAD_COUNT_EVENT, {"unreadCount": pending})
    except StreamSendError:
        logger.exception("Failed to send initial unread count to user %s", current_user.id)

    return StreamingResponse(
        stream.frames(),
        media_type=EVENT_STREAM_MEDIA_TYPE,
        headers=EVENT_STREAM_HEADERS,
    )


@router.get("/stream/status", response_model=StreamStatusResponse)
def stream_status(
    realtime: RealtimeNotifications = Depends(get_realtime),
    current_user: User = Depends(require_recognized_role),
) -> StreamStatusResponse:
    registry = realtime.registry
    return StreamStatusResponse(
        connected=registry.is_connected(current_user.id),
        total_active_connections=registry.active_count(),
    )


def _error_frames(detail: str) -> Iterator[str]:
    yield encode_event("error", detail)


def _to_read_model(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        title=notification.title,
        message=notification.message,
        notification_type=notification.notification_type,
        related_entity_type=notification.related_entity_type,
        related_entity_id=notification.related_entity_id,
        is_read=notification.is_read,
        read_at=notification.read_at,
        created_at=notification.created_at,
    )
