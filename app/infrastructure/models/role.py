"""SQLAlchemy model for user roles."""

from sqlalchemy import Column, Integer, String

from app.infrastructure.database import Base


class RoleModel(Base):
    """Database representation of the roles a user can hold.

    ``alias`` carries the uppercase identifier checked by the API
    (``CUSTOMER``, ``PROVIDER``, ``DELIVERY`` or ``ADMIN``).
    """

    __tablename__ = "role"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, unique=True)
    alias = Column(String(20), nullable=False, unique=True, index=True)


__all__ = ["RoleModel"]
