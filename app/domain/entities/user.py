"""Domain entity representing a user."""

from dataclasses import dataclass
from datetime import datetime

from .role import Role


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    password: str
    role: Role
    created_at: datetime | None = None

    def has_role(self, role: Role) -> bool:
        """Return ``True`` when the user holds ``role``."""

        return self.role is role

    def is_supervisor(self) -> bool:
        return self.has_role(Role.SUPERVISOR)

    def is_subject(self) -> bool:
        return self.has_role(Role.SUBJECT)


__all__ = ["User"]
