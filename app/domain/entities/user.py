"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

from .role import Role


@dataclass
class User:
    """Identity attributes of an application user."""

    id: int | None
    role: Role
    name: str
    email: str
    created_at: datetime | None
    is_active: bool
    deleted: bool
