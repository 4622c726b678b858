"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from app.domain.entities import Notification
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects.

    Soft-deleted rows are never returned by the query helpers; they are kept in
    the table but behave as if they did not exist.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self._get_model(notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = None,
    ) -> Sequence[Notification]:
        query = self._visible_for_user(user_id).order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(self, user_id: int) -> Sequence[Notification]:
        query = (
            self._visible_for_user(user_id)
            .filter(NotificationModel.is_read.is_(False))
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        )
        return [self._to_entity(model) for model in query.all()]

    def count_unread_for_user(self, user_id: int) -> int:
        count = (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.recipient_id == user_id)
            .filter(NotificationModel.is_deleted.is_(False))
            .filter(NotificationModel.is_read.is_(False))
            .scalar()
        )
        return int(count or 0)

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, notification: Notification) -> Notification:
        if notification.id is None:
            raise ValueError("Notification id is required for updates")
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            msg = f"Notification with id {notification.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, notification, include_creation_fields=False)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_many(self, notifications: Iterable[Notification]) -> list[Notification]:
        """Persist the mutable state of ``notifications`` in a single commit."""

        pending = [notification for notification in notifications if notification.id is not None]
        if not pending:
            return []

        ids = [notification.id for notification in pending]
        models = {
            model.id: model
            for model in self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .all()
        }
        for notification in pending:
            model = models.get(notification.id)
            if model is None:
                msg = f"Notification with id {notification.id} not found"
                raise ValueError(msg)
            self._apply_entity_to_model(
                model, notification, include_creation_fields=False
            )
            self.session.add(model)
        self.session.commit()
        for model in models.values():
            self.session.refresh(model)
        return [self._to_entity(models[notification.id]) for notification in pending]

    def _visible_for_user(self, user_id: int) -> Query:
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == user_id)
            .filter(NotificationModel.is_deleted.is_(False))
        )

    def _get_model(self, notification_id: int) -> NotificationModel | None:
        # Soft-deleted rows are not found here, so mark_read on one is NotFound.
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.is_deleted.is_(False))
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_at = (
                ensure_app_naive_datetime(notification.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            )
            model.recipient_id = notification.recipient_id
            model.title = notification.title
            model.message = notification.message
            model.notification_type = notification.notification_type
            model.related_entity_type = notification.related_entity_type
            model.related_entity_id = notification.related_entity_id
        model.is_read = notification.is_read
        model.read_at = ensure_app_naive_datetime(notification.read_at)
        model.is_deleted = notification.is_deleted

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            title=model.title,
            message=model.message,
            notification_type=model.notification_type,
            related_entity_type=model.related_entity_type,
            related_entity_id=model.related_entity_id,
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
            is_deleted=bool(model.is_deleted),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
