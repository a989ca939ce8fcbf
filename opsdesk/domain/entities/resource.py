"""Domain entity representing equipment that needs periodic maintenance."""

from dataclasses import dataclass
from datetime import date


@dataclass
class Resource:
    id: int | None
    name: str
    next_maintenance_date: date | None
    created_by: int


__all__ = ["Resource"]
