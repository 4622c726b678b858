"""Persistence layer for roles data."""

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import RECOGNIZED_ROLES, Role
from app.infrastructure.models import RoleModel


class RoleRepository:
    """Provide access to roles stored in the database."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_alias(self, alias: str) -> Role | None:
        model = (
            self.session.query(RoleModel)
            .filter(func.lower(RoleModel.alias) == alias.lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def ensure_recognized_roles(self) -> list[str]:
        """Insert any recognized role that is missing and return their aliases."""

        existing = {alias.upper() for (alias,) in self.session.query(RoleModel.alias).all()}
        missing = [alias for alias in RECOGNIZED_ROLES if alias not in existing]
        for alias in missing:
            self.session.add(RoleModel(name=alias.capitalize(), alias=alias))
        if missing:
            self.session.commit()
        return missing

    @staticmethod
    def _to_entity(model: RoleModel) -> Role:
        return Role(id=model.id, name=model.name, alias=model.alias)


__all__ = ["RoleRepository"]
