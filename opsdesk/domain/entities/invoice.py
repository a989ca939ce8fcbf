"""Domain entity representing an issued invoice."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any

INVOICE_STATUS_DRAFT = "draft"
INVOICE_STATUS_ISSUED = "issued"
INVOICE_STATUS_OVERDUE = "overdue"


@dataclass
class Invoice:
    id: int | None
    user_id: int
    client_id: int | None
    job_id: int | None
    invoice_number: str
    issue_date: date
    due_date: date
    status: str
    currency: str
    subtotal: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    items: list[dict[str, Any]] = field(default_factory=list)
    created_at: datetime | None = None


__all__ = ["Invoice", "INVOICE_STATUS_DRAFT", "INVOICE_STATUS_ISSUED", "INVOICE_STATUS_OVERDUE"]
