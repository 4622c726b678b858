"""Tests for the notification use cases."""

from __future__ import annotations

import json

import pytest

from app.application.use_cases.notifications import (
    NotificationAccessDeniedError,
    NotificationNotFoundError,
    NotificationRecipientNotFoundError,
    create_and_send,
    list_for_user,
    mark_all_read,
    mark_read,
    send_delivery_assigned,
    send_order_cancelled,
    send_order_created,
    send_order_status,
    send_payment,
    unread_count,
)
from app.infrastructure.notifications import DispatchResult, EventDispatcher
from app.infrastructure.repositories import NotificationRepository


def _events(stream) -> list[tuple[str, object]]:
    """Decode the frames waiting on ``stream`` into ``(event, data)`` pairs."""

    decoded = []
    for frame in stream.pending():
        event_line, data_line = frame.rstrip("\n").split("\n", 1)
        data = data_line.removeprefix("data: ")
        try:
            payload = json.loads(data)
        except json.JSONDecodeError:
            payload = data
        decoded.append((event_line.removeprefix("event: "), payload))
    return decoded


def _create(session, dispatcher, recipient_id, title="Order Update", **overrides):
    values = {
        "recipient_id": recipient_id,
        "title": title,
        "message": f"{title} message",
        "notification_type": "ORDER_UPDATE",
    }
    values.update(overrides)
    return create_and_send(session, dispatcher, **values)


class ExplodingDispatcher(EventDispatcher):
    def __init__(self) -> None:
        self.calls = 0

    def dispatch(self, user_id, event, payload):
        self.calls += 1
        raise RuntimeError("transport exploded")


def test_created_notifications_are_listed_newest_first(session, dispatcher, make_user):
    user = make_user()
    created = [_create(session, dispatcher, user.id, title=f"N{i}") for i in range(3)]

    listed = list_for_user(session, user.id)

    assert [n.id for n in listed] == [n.id for n in reversed(created)]
    assert unread_count(session, user.id) == 3
    assert all(not n.is_read and n.read_at is None for n in listed)


def test_list_respects_limit_and_owner(session, dispatcher, make_user):
    owner = make_user()
    other = make_user()
    for i in range(3):
        _create(session, dispatcher, owner.id, title=f"N{i}")
    _create(session, dispatcher, other.id)

    assert [n.title for n in list_for_user(session, owner.id, limit=2)] == ["N2", "N1"]
    assert len(list_for_user(session, other.id)) == 1


def test_soft_deleted_notifications_are_hidden(session, dispatcher, make_user):
    user = make_user()
    kept = _create(session, dispatcher, user.id)
    hidden = _create(session, dispatcher, user.id)
    repository = NotificationRepository(session)
    hidden.is_deleted = True
    repository.update(hidden)

    assert [n.id for n in list_for_user(session, user.id)] == [kept.id]
    assert unread_count(session, user.id) == 1
    with pytest.raises(NotificationNotFoundError):
        mark_read(session, dispatcher, notification_id=hidden.id, requester_id=user.id)


def test_create_for_unknown_user_fails(session, dispatcher):
    with pytest.raises(NotificationRecipientNotFoundError):
        _create(session, dispatcher, 999)


def test_create_pushes_notification_to_open_stream(session, registry, dispatcher, make_user):
    user = make_user()
    stream = registry.open(user.id)
    stream.pending()

    notification = _create(
        session,
        dispatcher,
        user.id,
        title="Order Update",
        related_entity_type="ORDER",
        related_entity_id=42,
    )

    ((event, payload),) = _events(stream)
    assert event == "notification"
    assert payload == {
        "id": notification.id,
        "title": "Order Update",
        "message": "Order Update message",
        "type": "ORDER_UPDATE",
        "relatedEntityType": "ORDER",
        "relatedEntityId": 42,
        "isRead": False,
        "createdAt": notification.created_at.isoformat(),
    }
    assert unread_count(session, user.id) == 1


def test_create_without_stream_still_persists(session, dispatcher, make_user):
    user = make_user()

    notification = _create(session, dispatcher, user.id)

    assert notification.id is not None
    assert dispatcher.dispatch(user.id, "check", {}) is DispatchResult.DROPPED
    assert [n.id for n in list_for_user(session, user.id)] == [notification.id]


def test_dispatch_errors_never_reach_the_caller(session, make_user):
    user = make_user()
    dispatcher = ExplodingDispatcher()

    notification = _create(session, dispatcher, user.id)
    mark_read(session, dispatcher, notification_id=notification.id, requester_id=user.id)
    mark_all_read(session, dispatcher, user_id=user.id)

    assert dispatcher.calls == 3
    assert list_for_user(session, user.id)[0].is_read


def test_mark_read_sets_read_flag_and_timestamp(session, registry, dispatcher, make_user):
    user = make_user()
    notification = _create(session, dispatcher, user.id)
    stream = registry.open(user.id)
    stream.pending()

    first = mark_read(session, dispatcher, notification_id=notification.id, requester_id=user.id)
    second = mark_read(session, dispatcher, notification_id=notification.id, requester_id=user.id)

    assert first.is_read and first.read_at is not None
    assert second.is_read
    assert second.read_at >= first.read_at
    assert unread_count(session, user.id) == 0
    assert _events(stream) == [
        ("notification_read", {"notificationId": notification.id, "isRead": True}),
        ("notification_read", {"notificationId": notification.id, "isRead": True}),
    ]


def test_mark_read_by_other_user_is_rejected(session, dispatcher, make_user):
    owner = make_user()
    intruder = make_user()
    notification = _create(session, dispatcher, owner.id)

    with pytest.raises(NotificationAccessDeniedError):
        mark_read(
            session, dispatcher, notification_id=notification.id, requester_id=intruder.id
        )

    stored = NotificationRepository(session).get(notification.id)
    assert stored.is_read is False
    assert stored.read_at is None


def test_mark_read_unknown_notification(session, dispatcher, make_user):
    user = make_user()

    with pytest.raises(NotificationNotFoundError):
        mark_read(session, dispatcher, notification_id=12345, requester_id=user.id)


def test_mark_all_read_stamps_unread_with_shared_timestamp(
    session, registry, dispatcher, make_user
):
    user = make_user()
    other = make_user()
    already_read = _create(session, dispatcher, user.id, title="Old")
    original = mark_read(
        session, dispatcher, notification_id=already_read.id, requester_id=user.id
    )
    for i in range(3):
        _create(session, dispatcher, user.id, title=f"N{i}")
    untouched = _create(session, dispatcher, other.id)
    stream = registry.open(user.id)
    stream.pending()

    updated = mark_all_read(session, dispatcher, user_id=user.id)

    assert updated == 3
    notifications = {n.id: n for n in list_for_user(session, user.id)}
    assert notifications[already_read.id].read_at == original.read_at
    stamps = {n.read_at for key, n in notifications.items() if key != already_read.id}
    assert len(stamps) == 1 and None not in stamps
    assert all(n.is_read for n in notifications.values())
    assert unread_count(session, other.id) == 1
    assert NotificationRepository(session).get(untouched.id).read_at is None
    assert _events(stream) == [("notifications_all_read", {"allRead": True})]


@pytest.mark.parametrize(
    ("preset", "title", "notification_type"),
    [
        (send_order_status, "Order Update", "ORDER_UPDATE"),
        (send_payment, "Payment Update", "PAYMENT"),
        (send_order_created, "New Order", "ORDER_CREATED"),
        (send_order_cancelled, "Order Cancelled", "ORDER_CANCELLED"),
        (send_delivery_assigned, "Delivery Partner Assigned", "DELIVERY_ASSIGNED"),
    ],
)
def test_presets_fill_title_and_type(
    session, dispatcher, make_user, preset, title, notification_type
):
    user = make_user()

    notification = preset(
        session, dispatcher, user_id=user.id, order_id=88, message="Details"
    )

    assert notification.title == title
    assert notification.notification_type == notification_type
    assert notification.related_entity_type == "ORDER"
    assert notification.related_entity_id == 88
    assert notification.message == "Details"
