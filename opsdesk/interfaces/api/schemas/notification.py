"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int]:
        """Return the identifiers without duplicates preserving order."""

        return list(dict.fromkeys(self.ids))


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: int
    recipient_id: int
    type: str
    priority: str
    title: str
    message: str
    payload: dict[str, Any] = Field(default_factory=dict)
    read: bool = False
    created_at: datetime


class UnreadCountRead(BaseModel):
    count: int


class NotificationsUpdatedRead(BaseModel):
    updated: int


__all__ = [
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationsUpdatedRead",
    "UnreadCountRead",
]
