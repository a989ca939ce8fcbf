"""Persistence helpers for invoicing preferences and the invoice counter."""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from opsdesk.domain.entities import BusinessSettings
from opsdesk.infrastructure.models import BusinessSettingsModel

logger = logging.getLogger(__name__)


class InvoiceNumberConflictError(RuntimeError):
    """Raised when the invoice counter keeps moving under concurrent writers."""


class BusinessSettingsRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_user(self, user_id: int) -> BusinessSettings | None:
        model = (
            self.session.query(BusinessSettingsModel)
            .filter(BusinessSettingsModel.user_id == user_id)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def create(self, settings: BusinessSettings) -> BusinessSettings:
        model = BusinessSettingsModel(
            user_id=settings.user_id,
            business_name=settings.business_name,
            invoice_prefix=settings.invoice_prefix,
            next_invoice_number=settings.next_invoice_number,
            currency=settings.currency,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def claim_next_invoice_number(self, user_id: int, *, max_attempts: int = 5) -> int:
        """Advance the counter with a compare-and-set and return the claimed value.

        The update is left uncommitted so the caller can commit it together with
        the invoice that uses the number; a rollback releases the number again.
        """

        for attempt in range(1, max_attempts + 1):
            current = self.session.execute(
                select(BusinessSettingsModel.next_invoice_number).where(
                    BusinessSettingsModel.user_id == user_id
                )
            ).scalar_one_or_none()
            if current is None:
                raise LookupError(f"No business settings for user {user_id}")

            number = int(current or 1)
            result = self.session.execute(
                update(BusinessSettingsModel)
                .where(
                    BusinessSettingsModel.user_id == user_id,
                    BusinessSettingsModel.next_invoice_number == current,
                )
                .values(next_invoice_number=number + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 1:
                return number
            logger.info(
                "Invoice counter for user %s changed concurrently (attempt %s/%s)",
                user_id,
                attempt,
                max_attempts,
            )

        raise InvoiceNumberConflictError(
            f"Could not reserve an invoice number for user {user_id}"
        )

    @staticmethod
    def _to_entity(model: BusinessSettingsModel) -> BusinessSettings:
        return BusinessSettings(
            id=model.id,
            user_id=model.user_id,
            business_name=model.business_name,
            invoice_prefix=model.invoice_prefix,
            next_invoice_number=int(model.next_invoice_number or 1),
            currency=model.currency,
        )


__all__ = ["BusinessSettingsRepository", "InvoiceNumberConflictError"]
