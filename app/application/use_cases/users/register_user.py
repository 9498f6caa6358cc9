"""Use case for registering supervisors and subjects."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import Role, User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import get_password_hash

from .validators import ensure_role, normalize_email


class EmailAlreadyRegistered(ValueError):
    """Raised when another account already uses the e-mail address."""


def register_user(
    session: Session,
    *,
    name: str,
    email: str,
    password: str,
    role: str | Role,
) -> User:
    """Create a new account ensuring unique email addresses."""

    repository = UserRepository(session)
    normalized_email = normalize_email(email)
    user_role = ensure_role(role)

    if repository.get_by_email(normalized_email):
        raise EmailAlreadyRegistered("E-mail já cadastrado.")

    user = User(
        id=None,
        name=name.strip(),
        email=normalized_email,
        password=get_password_hash(password),
        role=user_role,
    )
    try:
        return repository.create(user)
    except IntegrityError as exc:
        session.rollback()
        raise EmailAlreadyRegistered("E-mail já cadastrado.") from exc
