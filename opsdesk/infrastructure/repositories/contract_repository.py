"""Persistence helpers for contracts."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from opsdesk.domain.entities import Contract
from opsdesk.infrastructure.models import ContractModel
from opsdesk.utils import ensure_app_timezone


class ContractRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_job(self, job_id: int) -> Sequence[Contract]:
        query = self.session.query(ContractModel).filter(ContractModel.job_id == job_id)
        return [self._to_entity(model) for model in query.all()]

    def create(self, contract: Contract) -> Contract:
        model = ContractModel(
            client_id=contract.client_id,
            job_id=contract.job_id,
            status=contract.status,
            clauses=dict(contract.clauses),
            created_by=contract.created_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ContractModel) -> Contract:
        return Contract(
            id=model.id,
            client_id=model.client_id,
            job_id=model.job_id,
            status=model.status,
            created_by=model.created_by,
            clauses=dict(model.clauses or {}),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ContractRepository"]
