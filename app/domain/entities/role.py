"""Domain entity representing a user role."""

from enum import Enum


class Role(str, Enum):
    """Roles a user can hold inside the coaching relationship."""

    SUPERVISOR = "SUPERVISOR"
    SUBJECT = "SUBJECT"


__all__ = ["Role"]
