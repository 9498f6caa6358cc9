"""Use case for authenticating a user."""

from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import verify_password


def authenticate_user(session: Session, email: str, password: str) -> User | None:
    """Return the user when ``email``/``password`` match, ``None`` otherwise."""

    user = UserRepository(session).get_by_email(email.strip())
    if user is None:
        return None
    if not verify_password(password, user.password):
        return None
    return user
