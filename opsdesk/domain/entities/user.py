"""Domain entity representing a notification recipient."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Owner of the business records the automation works on."""

    id: int | None
    name: str
    email: str | None
    is_active: bool = True
    created_at: datetime | None = None


__all__ = ["User"]
