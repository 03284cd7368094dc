"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    username: str
    email: str
    password: str
    role: str = ROLE_USER
    is_active: bool = True
    created_at: datetime | None = None

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.role.lower() == ROLE_ADMIN


__all__ = ["ROLE_ADMIN", "ROLE_USER", "User"]
