"""Persistence helpers for invoices."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from opsdesk.domain.entities import INVOICE_STATUS_ISSUED, INVOICE_STATUS_OVERDUE, Invoice
from opsdesk.infrastructure.models import InvoiceModel
from opsdesk.utils import ensure_app_timezone


class InvoiceRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(self, user_id: int) -> Sequence[Invoice]:
        query = (
            self.session.query(InvoiceModel)
            .filter(InvoiceModel.user_id == user_id)
            .order_by(InvoiceModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def mark_overdue(self, user_id: int, *, today: date) -> int:
        """Flag the user's issued invoices whose due date has passed; return how many."""

        updated = (
            self.session.query(InvoiceModel)
            .filter(InvoiceModel.user_id == user_id)
            .filter(InvoiceModel.status == INVOICE_STATUS_ISSUED)
            .filter(InvoiceModel.due_date < today)
            .update({InvoiceModel.status: INVOICE_STATUS_OVERDUE}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def create(self, invoice: Invoice) -> Invoice:
        """Insert ``invoice`` and commit, together with any pending counter update."""

        model = InvoiceModel(
            user_id=invoice.user_id,
            client_id=invoice.client_id,
            job_id=invoice.job_id,
            invoice_number=invoice.invoice_number,
            issue_date=invoice.issue_date,
            due_date=invoice.due_date,
            items=list(invoice.items),
            subtotal=invoice.subtotal,
            tax_amount=invoice.tax_amount,
            total=invoice.total,
            status=invoice.status,
            currency=invoice.currency,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: InvoiceModel) -> Invoice:
        return Invoice(
            id=model.id,
            user_id=model.user_id,
            client_id=model.client_id,
            job_id=model.job_id,
            invoice_number=model.invoice_number,
            issue_date=model.issue_date,
            due_date=model.due_date,
            status=model.status,
            currency=model.currency,
            subtotal=model.subtotal,
            tax_amount=model.tax_amount,
            total=model.total,
            items=list(model.items or []),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["InvoiceRepository"]
