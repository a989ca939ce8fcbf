"""Domain entity representing a service contract."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

CONTRACT_STATUS_DRAFT = "draft"
CONTRACT_STATUS_SIGNED = "signed"


@dataclass
class Contract:
    id: int | None
    client_id: int | None
    job_id: int | None
    status: str
    created_by: int
    clauses: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None


__all__ = ["Contract", "CONTRACT_STATUS_DRAFT", "CONTRACT_STATUS_SIGNED"]
