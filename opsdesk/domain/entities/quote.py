"""Domain entity representing a price quote sent to a client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

QUOTE_STATUS_DRAFT = "draft"
QUOTE_STATUS_SENT = "sent"
QUOTE_STATUS_ACCEPTED = "accepted"


@dataclass
class Quote:
    id: int | None
    client_id: int | None
    created_by: int
    status: str
    currency: str
    total: Decimal = Decimal("0")
    tax: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    items: list[dict[str, Any]] = field(default_factory=list)
    lead_id: int | None = None
    job_id: int | None = None
    converted_to_job_at: datetime | None = None
    created_at: datetime | None = None


__all__ = ["Quote", "QUOTE_STATUS_ACCEPTED", "QUOTE_STATUS_DRAFT", "QUOTE_STATUS_SENT"]
