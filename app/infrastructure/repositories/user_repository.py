"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session, joinedload

from app.domain.entities import Role, User
from app.infrastructure.models import UserModel


class UserRepository:
    """Provide the identity lookups required by the notification endpoints."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email)
        return self._to_entity(model) if model else None

    def exists(self, user_id: int) -> bool:
        return self._get_model(id=user_id) is not None

    def create(self, user: User) -> User:
        model = UserModel()
        model.role_id = user.role.id
        model.name = user.name
        model.email = user.email
        model.is_active = user.is_active
        model.deleted = user.deleted
        if user.created_at is not None:
            model.created_at = user.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        if model.role is None:
            self.session.refresh(model, attribute_names=["role"])
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            role=UserRepository._role_to_entity(model.role),
            name=model.name,
            email=model.email,
            created_at=model.created_at,
            is_active=model.is_active,
            deleted=model.deleted,
        )

    def _get_model(self, include_deleted: bool = False, **filters) -> UserModel | None:
        query = self.session.query(UserModel).options(joinedload(UserModel.role))
        if not include_deleted:
            query = query.filter(UserModel.deleted.is_(False))
        return query.filter_by(**filters).first()

    @staticmethod
    def _role_to_entity(model_role) -> Role:
        if model_role is None:
            msg = "User role is not set"
            raise ValueError(msg)
        return Role(id=model_role.id, name=model_role.name, alias=model_role.alias)


__all__ = ["UserRepository"]
