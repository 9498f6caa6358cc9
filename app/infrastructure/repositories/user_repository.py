"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import Role, User
from app.infrastructure.models import UserModel
from app.utils import ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self._get_model(id=user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email.lower())
        return self._to_entity(model) if model else None

    def get_with_role(self, user_id: int, role: Role) -> User | None:
        model = self._get_model(id=user_id, role=role)
        return self._to_entity(model) if model else None

    def list_by_role(self, role: Role) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.role == role)
            .order_by(UserModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email.lower(),
            password=user.password,
            role=user.role,
        )
        if user.created_at is not None:
            model.created_at = user.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, **filters) -> UserModel | None:
        return self.session.query(UserModel).filter_by(**filters).first()

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            password=model.password,
            role=Role(model.role),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
