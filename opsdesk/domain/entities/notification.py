"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_TYPE_JOB_REMINDER = "job_reminder"
NOTIFICATION_TYPE_LEAD_FOLLOW_UP = "lead_follow_up"
NOTIFICATION_TYPE_PAYMENT_OVERDUE = "payment_overdue"
NOTIFICATION_TYPE_PAYMENT_REMINDER = "payment_reminder"
NOTIFICATION_TYPE_MAINTENANCE_REMINDER = "maintenance_reminder"
NOTIFICATION_TYPE_CONTRACT_SIGNED = "contract_signed"
NOTIFICATION_TYPE_JOB_COMPLETED = "job_completed"
NOTIFICATION_TYPE_NEW_LEAD = "new_lead"

PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"
PRIORITY_URGENT = "urgent"

NOTIFICATION_PRIORITIES = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH, PRIORITY_URGENT)

# Payload key holding the weak reference to the entity that triggered each type.
NOTIFICATION_REFERENCE_KEYS: dict[str, str] = {
    NOTIFICATION_TYPE_JOB_REMINDER: "job_id",
    NOTIFICATION_TYPE_LEAD_FOLLOW_UP: "lead_id",
    NOTIFICATION_TYPE_PAYMENT_OVERDUE: "payment_id",
    NOTIFICATION_TYPE_PAYMENT_REMINDER: "payment_id",
    NOTIFICATION_TYPE_MAINTENANCE_REMINDER: "resource_id",
    NOTIFICATION_TYPE_CONTRACT_SIGNED: "contract_id",
    NOTIFICATION_TYPE_JOB_COMPLETED: "job_id",
    NOTIFICATION_TYPE_NEW_LEAD: "lead_id",
}

NOTIFICATION_TYPES = tuple(NOTIFICATION_REFERENCE_KEYS)


def reference_key_for(notification_type: str) -> str:
    """Return the payload key that references the triggering entity."""

    try:
        return NOTIFICATION_REFERENCE_KEYS[notification_type]
    except KeyError:
        raise ValueError(f"Unknown notification type: {notification_type}") from None


@dataclass
class Notification:
    """Information message delivered to a specific recipient."""

    id: int | None
    recipient_id: int
    type: str
    payload: dict[str, Any] = field(default_factory=dict)
    priority: str = PRIORITY_MEDIUM
    read: bool = False
    created_at: datetime | None = None

    @property
    def reference_key(self) -> str:
        return reference_key_for(self.type)

    @property
    def reference_id(self) -> Any:
        return self.payload.get(self.reference_key)

    @property
    def title(self) -> str:
        return str(self.payload.get("title") or "")

    @property
    def message(self) -> str:
        return str(self.payload.get("message") or "")


__all__ = [
    "Notification",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_REFERENCE_KEYS",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_CONTRACT_SIGNED",
    "NOTIFICATION_TYPE_JOB_COMPLETED",
    "NOTIFICATION_TYPE_JOB_REMINDER",
    "NOTIFICATION_TYPE_LEAD_FOLLOW_UP",
    "NOTIFICATION_TYPE_MAINTENANCE_REMINDER",
    "NOTIFICATION_TYPE_NEW_LEAD",
    "NOTIFICATION_TYPE_PAYMENT_OVERDUE",
    "NOTIFICATION_TYPE_PAYMENT_REMINDER",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "PRIORITY_URGENT",
    "reference_key_for",
]
