"""Domain entity describing the automation preferences of a recipient."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class NotificationSettings:
    """One switch per automation rule plus the email fan-out toggle."""

    id: int | None
    user_id: int
    job_reminders: bool = True
    lead_follow_up: bool = True
    payment_overdue: bool = True
    maintenance_reminder: bool = True
    new_lead: bool = True
    job_completed: bool = True
    email_notifications: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_enabled(self, flag: str) -> bool:
        """Return ``True`` when the boolean setting named ``flag`` is switched on."""

        return bool(getattr(self, flag, False))


__all__ = ["NotificationSettings"]
