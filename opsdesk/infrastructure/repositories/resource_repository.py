"""Persistence helpers for maintained resources."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from opsdesk.domain.entities import Resource
from opsdesk.infrastructure.models import ResourceModel


class ResourceRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_with_maintenance_between(
        self, owner_id: int, *, start: date, end: date
    ) -> Sequence[Resource]:
        query = (
            self.session.query(ResourceModel)
            .filter(ResourceModel.created_by == owner_id)
            .filter(ResourceModel.next_maintenance_date.is_not(None))
            .filter(ResourceModel.next_maintenance_date >= start)
            .filter(ResourceModel.next_maintenance_date <= end)
            .order_by(ResourceModel.next_maintenance_date.asc(), ResourceModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, resource: Resource) -> Resource:
        model = ResourceModel(
            name=resource.name,
            next_maintenance_date=resource.next_maintenance_date,
            created_by=resource.created_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ResourceModel) -> Resource:
        return Resource(
            id=model.id,
            name=model.name,
            next_maintenance_date=model.next_maintenance_date,
            created_by=model.created_by,
        )


__all__ = ["ResourceRepository"]
