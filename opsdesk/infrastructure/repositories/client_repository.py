"""Persistence helpers for clients."""

from __future__ import annotations

from sqlalchemy.orm import Session

from opsdesk.domain.entities import Client
from opsdesk.infrastructure.models import ClientModel
from opsdesk.utils import ensure_app_timezone


class ClientRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, client_id: int) -> Client | None:
        model = self.session.get(ClientModel, client_id)
        return self._to_entity(model) if model else None

    def create(self, client: Client) -> Client:
        model = ClientModel(
            name=client.name,
            email=client.email,
            phone=client.phone,
            created_by=client.created_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ClientModel) -> Client:
        return Client(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ClientRepository"]
