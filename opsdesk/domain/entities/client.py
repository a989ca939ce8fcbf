"""Domain entity representing a customer of the business."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Client:
    id: int | None
    name: str
    email: str | None
    phone: str | None
    created_by: int
    created_at: datetime | None = None


__all__ = ["Client"]
