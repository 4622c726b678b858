"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    title: str
    message: str
    notification_type: str
    related_entity_type: str | None = None
    related_entity_id: int | None = None
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime


class NotificationListResponse(CamelModel):
    """Notifications of the authenticated user plus their unread total."""

    notifications: list[NotificationRead] = Field(default_factory=list)
    unread_count: int


class NotificationActionResponse(CamelModel):
    """Acknowledgement returned by the mark-as-read endpoints."""

    message: str
    updated: int | None = None


class StreamStatusResponse(CamelModel):
    """Whether the caller has an open stream and how many streams are open."""

    connected: bool
    total_active_connections: int


__all__ = [
    "NotificationRead",
    "NotificationListResponse",
    "NotificationActionResponse",
    "StreamStatusResponse",
]
