"""Use case for listing subjects visible to supervisors."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Role, User
from app.infrastructure.repositories import UserRepository


def list_subjects(session: Session) -> Sequence[User]:
    """Return every subject, newest first."""

    return UserRepository(session).list_by_role(Role.SUBJECT)
