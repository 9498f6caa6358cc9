"""Use cases for managing users."""

from .authenticate_user import authenticate_user
from .list_subjects import list_subjects
from .register_user import EmailAlreadyRegistered, register_user

__all__ = [
    "EmailAlreadyRegistered",
    "authenticate_user",
    "list_subjects",
    "register_user",
]
