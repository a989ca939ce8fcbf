"""Domain entity representing a payment expected from a client."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUS_PAID = "paid"
PAYMENT_STATUS_CANCELLED = "cancelled"


@dataclass
class Payment:
    id: int | None
    client_id: int | None
    amount: Decimal
    status: str
    due_date: date | None
    created_by: int
    created_at: datetime | None
    client_name: str | None = None


__all__ = [
    "Payment",
    "PAYMENT_STATUS_CANCELLED",
    "PAYMENT_STATUS_PAID",
    "PAYMENT_STATUS_PENDING",
]
