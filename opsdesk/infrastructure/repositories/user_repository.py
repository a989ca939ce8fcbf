"""Persistence helpers for recipient accounts."""

from __future__ import annotations

from sqlalchemy.orm import Session

from opsdesk.domain.entities import User
from opsdesk.infrastructure.models import UserModel
from opsdesk.utils import ensure_app_timezone


class UserRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(name=user.name, email=user.email, is_active=user.is_active)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
