"""Persistence helpers for quotes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from opsdesk.domain.entities import Quote
from opsdesk.infrastructure.models import QuoteModel
from opsdesk.utils import ensure_app_naive_datetime, ensure_app_timezone


class QuoteRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, quote_id: int) -> Quote | None:
        model = self.session.get(QuoteModel, quote_id)
        return self._to_entity(model) if model else None

    def get_for_owner(self, quote_id: int, owner_id: int) -> Quote | None:
        model = self._owned_model(quote_id, owner_id)
        return self._to_entity(model) if model else None

    def create(self, quote: Quote) -> Quote:
        model = QuoteModel(
            client_id=quote.client_id,
            lead_id=quote.lead_id,
            job_id=quote.job_id,
            items=list(quote.items),
            total=quote.total,
            tax=quote.tax,
            discount=quote.discount,
            currency=quote.currency,
            status=quote.status,
            created_by=quote.created_by,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def link_job(
        self,
        quote_id: int,
        *,
        job_id: int,
        converted_at: datetime,
        owner_id: int | None = None,
    ) -> Quote:
        """Record the job a quote was converted into."""

        if owner_id is None:
            model = self.session.get(QuoteModel, quote_id)
        else:
            model = self._owned_model(quote_id, owner_id)
        if model is None:
            raise LookupError(f"Quote with id {quote_id} not found")
        model.job_id = job_id
        model.converted_to_job_at = ensure_app_naive_datetime(converted_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _owned_model(self, quote_id: int, owner_id: int) -> QuoteModel | None:
        return (
            self.session.query(QuoteModel)
            .filter(QuoteModel.id == quote_id, QuoteModel.created_by == owner_id)
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: QuoteModel) -> Quote:
        return Quote(
            id=model.id,
            client_id=model.client_id,
            created_by=model.created_by,
            status=model.status,
            currency=model.currency,
            total=model.total,
            tax=model.tax,
            discount=model.discount,
            items=list(model.items or []),
            lead_id=model.lead_id,
            job_id=model.job_id,
            converted_to_job_at=ensure_app_timezone(model.converted_to_job_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["QuoteRepository"]
