"""Persistence helpers for leads."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from opsdesk.domain.entities import LEAD_TERMINAL_STATUSES, Lead
from opsdesk.infrastructure.models import LeadModel
from opsdesk.utils import ensure_app_naive_datetime, ensure_app_timezone


class LeadRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, lead_id: int) -> Lead | None:
        model = self.session.get(LeadModel, lead_id)
        return self._to_entity(model) if model else None

    def get_for_owner(self, lead_id: int, owner_id: int) -> Lead | None:
        model = (
            self.session.query(LeadModel)
            .filter(LeadModel.id == lead_id, LeadModel.created_by == owner_id)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def list_open_for_owner(self, owner_id: int) -> Sequence[Lead]:
        query = (
            self.session.query(LeadModel)
            .filter(LeadModel.created_by == owner_id)
            .filter(LeadModel.status.not_in(sorted(LEAD_TERMINAL_STATUSES)))
            .order_by(LeadModel.created_at.asc(), LeadModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, lead: Lead) -> Lead:
        model = LeadModel(
            client_id=lead.client_id,
            status=lead.status,
            created_by=lead.created_by,
        )
        if lead.created_at is not None:
            model.created_at = ensure_app_naive_datetime(lead.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: LeadModel) -> Lead:
        return Lead(
            id=model.id,
            client_id=model.client_id,
            status=model.status,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            client_name=model.client.name if model.client else None,
        )


__all__ = ["LeadRepository"]
