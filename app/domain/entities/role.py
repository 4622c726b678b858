"""Domain entity representing a user role."""

from dataclasses import dataclass
from typing import Final

ROLE_CUSTOMER: Final[str] = "CUSTOMER"
ROLE_PROVIDER: Final[str] = "PROVIDER"
ROLE_DELIVERY: Final[str] = "DELIVERY"
ROLE_ADMIN: Final[str] = "ADMIN"

RECOGNIZED_ROLES: Final[tuple[str, ...]] = (
    ROLE_CUSTOMER,
    ROLE_PROVIDER,
    ROLE_DELIVERY,
    ROLE_ADMIN,
)


@dataclass
class Role:
    """Core attributes describing a role that can be assigned to a user."""

    id: int
    name: str
    alias: str

    def is_recognized(self) -> bool:
        """Return ``True`` when the role may use the notification endpoints."""

        return self.alias.upper() in RECOGNIZED_ROLES


__all__ = [
    "Role",
    "ROLE_CUSTOMER",
    "ROLE_PROVIDER",
    "ROLE_DELIVERY",
    "ROLE_ADMIN",
    "RECOGNIZED_ROLES",
]
