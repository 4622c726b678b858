"""Notification presets emitted by order and payment workflows."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import (
    NOTIFICATION_TYPE_DELIVERY_ASSIGNED,
    NOTIFICATION_TYPE_ORDER_CANCELLED,
    NOTIFICATION_TYPE_ORDER_CREATED,
    NOTIFICATION_TYPE_ORDER_UPDATE,
    NOTIFICATION_TYPE_PAYMENT,
    RELATED_ENTITY_ORDER,
    Notification,
)
from app.infrastructure.notifications import EventDispatcher

from .create_notification import create_and_send


def _notify_order(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    user_id: int,
    order_id: int,
    title: str,
    notification_type: str,
    message: str,
) -> Notification:
    return create_and_send(
        session,
        dispatcher,
        recipient_id=user_id,
        title=title,
        message=message,
        notification_type=notification_type,
        related_entity_type=RELATED_ENTITY_ORDER,
        related_entity_id=order_id,
    )


def send_order_status(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    user_id: int,
    order_id: int,
    message: str,
) -> Notification:
    """Tell ``user_id`` that the status of ``order_id`` changed."""

    return _notify_order(
        session,
        dispatcher,
        user_id=user_id,
        order_id=order_id,
        title="Order Update",
        notification_type=NOTIFICATION_TYPE_ORDER_UPDATE,
        message=message,
    )


def send_payment(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    user_id: int,
    order_id: int,
    message: str,
) -> Notification:
    """Tell ``user_id`` about a payment settled for ``order_id``."""

    return _notify_order(
        session,
        dispatcher,
        user_id=user_id,
        order_id=order_id,
        title="Payment Update",
        notification_type=NOTIFICATION_TYPE_PAYMENT,
        message=message,
    )


def send_order_created(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    user_id: int,
    order_id: int,
    message: str,
) -> Notification:
    return _notify_order(
        session,
        dispatcher,
        user_id=user_id,
        order_id=order_id,
        title="New Order",
        notification_type=NOTIFICATION_TYPE_ORDER_CREATED,
        message=message,
    )


def send_order_cancelled(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    user_id: int,
    order_id: int,
    message: str,
) -> Notification:
    return _notify_order(
        session,
        dispatcher,
        user_id=user_id,
        order_id=order_id,
        title="Order Cancelled",
        notification_type=NOTIFICATION_TYPE_ORDER_CANCELLED,
        message=message,
    )


def send_delivery_assigned(
    session: Session,
    dispatcher: EventDispatcher,
    *,
    user_id: int,
    order_id: int,
    message: str,
) -> Notification:
    """Tell ``user_id`` that a delivery partner was assigned to ``order_id``."""

    return _notify_order(
        session,
        dispatcher,
        user_id=user_id,
        order_id=order_id,
        title="Delivery Partner Assigned",
        notification_type=NOTIFICATION_TYPE_DELIVERY_ASSIGNED,
        message=message,
    )


__all__ = [
    "send_order_status",
    "send_payment",
    "send_order_created",
    "send_order_cancelled",
    "send_delivery_assigned",
]
