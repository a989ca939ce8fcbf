"""Pydantic models describing automation run results."""

from __future__ import annotations

from pydantic import BaseModel


class AutomationRunRead(BaseModel):
    """Counters reported by an on-demand notification check."""

    created: int
    evaluated: int
    failed: int
    invoices_marked_overdue: int = 0


__all__ = ["AutomationRunRead"]
