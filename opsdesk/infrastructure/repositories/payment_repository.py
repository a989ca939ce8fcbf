"""Persistence helpers for payments."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from opsdesk.domain.entities import PAYMENT_STATUS_PENDING, Payment
from opsdesk.infrastructure.models import PaymentModel
from opsdesk.utils import ensure_app_naive_datetime, ensure_app_timezone


class PaymentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, payment_id: int) -> Payment | None:
        model = self.session.get(PaymentModel, payment_id)
        return self._to_entity(model) if model else None

    def get_for_owner(self, payment_id: int, owner_id: int) -> Payment | None:
        model = self._owned_model(payment_id, owner_id)
        return self._to_entity(model) if model else None

    def list_pending_for_owner(self, owner_id: int) -> Sequence[Payment]:
        query = (
            self.session.query(PaymentModel)
            .filter(PaymentModel.created_by == owner_id)
            .filter(PaymentModel.status == PAYMENT_STATUS_PENDING)
            .order_by(PaymentModel.created_at.asc(), PaymentModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def list_pending_due_between(
        self, owner_id: int, *, start: date, end: date
    ) -> Sequence[Payment]:
        """Return the owner's pending payments whose due date falls inside ``[start, end]``."""

        query = (
            self.session.query(PaymentModel)
            .filter(PaymentModel.created_by == owner_id)
            .filter(PaymentModel.status == PAYMENT_STATUS_PENDING)
            .filter(PaymentModel.due_date.is_not(None))
            .filter(PaymentModel.due_date >= start)
            .filter(PaymentModel.due_date <= end)
            .order_by(PaymentModel.due_date.asc(), PaymentModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, payment: Payment) -> Payment:
        model = PaymentModel(
            client_id=payment.client_id,
            amount=payment.amount,
            status=payment.status,
            due_date=payment.due_date,
            created_by=payment.created_by,
        )
        if payment.created_at is not None:
            model.created_at = ensure_app_naive_datetime(payment.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update_status(
        self, payment_id: int, status: str, *, owner_id: int | None = None
    ) -> Payment:
        if owner_id is None:
            model = self.session.get(PaymentModel, payment_id)
        else:
            model = self._owned_model(payment_id, owner_id)
        if model is None:
            raise LookupError(f"Payment with id {payment_id} not found")
        model.status = status
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _owned_model(self, payment_id: int, owner_id: int) -> PaymentModel | None:
        return (
            self.session.query(PaymentModel)
            .filter(PaymentModel.id == payment_id, PaymentModel.created_by == owner_id)
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: PaymentModel) -> Payment:
        return Payment(
            id=model.id,
            client_id=model.client_id,
            amount=model.amount,
            status=model.status,
            due_date=model.due_date,
            created_by=model.created_by,
            created_at=ensure_app_timezone(model.created_at),
            client_name=model.client.name if model.client else None,
        )


__all__ = ["PaymentRepository"]
