"""Notification rules evaluated by the automation scheduler.

Every rule is a pure function of one entity snapshot and the evaluation time.
Rules never look at previously issued notifications: suppressing repeats
inside the cooldown window is the job of :mod:`.dedup`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable

from opsdesk.domain.entities import (
    JOB_STATUS_CANCELLED,
    JOB_STATUS_COMPLETED,
    NOTIFICATION_TYPE_JOB_REMINDER,
    NOTIFICATION_TYPE_LEAD_FOLLOW_UP,
    NOTIFICATION_TYPE_MAINTENANCE_REMINDER,
    NOTIFICATION_TYPE_PAYMENT_OVERDUE,
    NOTIFICATION_TYPE_PAYMENT_REMINDER,
    PAYMENT_STATUS_PENDING,
    PRIORITY_HIGH,
    PRIORITY_MEDIUM,
    PRIORITY_URGENT,
    Job,
    Lead,
    NotificationSettings,
    Payment,
    Resource,
    reference_key_for,
)
from opsdesk.utils import ensure_app_timezone, whole_days_between

JOB_REMINDER_WINDOW_HOURS = 24
LEAD_FOLLOW_UP_AFTER_DAYS = 3
LEAD_ESCALATION_DAYS = 7
PAYMENT_OVERDUE_AFTER_DAYS = 7
PAYMENT_ESCALATION_DAYS = 14
PAYMENT_REMINDER_WINDOW_DAYS = 3
PAYMENT_REMINDER_ESCALATION_DAYS = 1
MAINTENANCE_WINDOW_DAYS = 7
MAINTENANCE_ESCALATION_DAYS = 2

DEFAULT_COOLDOWN = timedelta(hours=24)


@dataclass(frozen=True)
class NotificationCandidate:
    """A notification a rule wants to emit, before deduplication."""

    type: str
    priority: str
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def reference_key(self) -> str:
        return reference_key_for(self.type)

    @property
    def reference_value(self) -> Any:
        return self.payload[self.reference_key]


Evaluator = Callable[[Any, datetime], NotificationCandidate | None]


@dataclass(frozen=True)
class AutomationRule:
    """Static definition of one notification rule."""

    type: str
    reference_key: str
    cooldown: timedelta
    settings_flag: str
    evaluator: Evaluator

    def is_enabled(self, settings: NotificationSettings | None) -> bool:
        return settings is not None and settings.is_enabled(self.settings_flag)


def evaluate(rule: AutomationRule, snapshot: Any, now: datetime) -> NotificationCandidate | None:
    """Run ``rule`` against ``snapshot`` at ``now``."""

    return rule.evaluator(snapshot, ensure_app_timezone(now))


def evaluate_job_reminder(job: Job, now: datetime) -> NotificationCandidate | None:
    """Fire while the job starts within the next 24 hours."""

    if job.start_datetime is None or job.status in (JOB_STATUS_CANCELLED, JOB_STATUS_COMPLETED):
        return None

    hours_until_start = (job.start_datetime - now).total_seconds() / 3600
    if not 0 < hours_until_start <= JOB_REMINDER_WINDOW_HOURS:
        return None

    whole_hours = int(hours_until_start)
    when = f"in {whole_hours} hours" if whole_hours >= 1 else "in less than an hour"
    return NotificationCandidate(
        type=NOTIFICATION_TYPE_JOB_REMINDER,
        priority=PRIORITY_HIGH,
        payload={
            "title": "Upcoming job",
            "message": f'"{job.title}" starts {when}',
            "job_id": job.id,
            "start_datetime": job.start_datetime.isoformat(),
        },
    )


def evaluate_lead_follow_up(lead: Lead, now: datetime) -> NotificationCandidate | None:
    """Fire for open leads created three or more days ago."""

    if lead.created_at is None or not lead.is_open():
        return None

    days_since_created = whole_days_between(lead.created_at, now)
    if days_since_created < LEAD_FOLLOW_UP_AFTER_DAYS:
        return None

    priority = PRIORITY_HIGH if days_since_created >= LEAD_ESCALATION_DAYS else PRIORITY_MEDIUM
    client_name = lead.client_name or "Client"
    return NotificationCandidate(
        type=NOTIFICATION_TYPE_LEAD_FOLLOW_UP,
        priority=priority,
        payload={
            "title": "Follow-up needed",
            "message": f"Lead from {client_name} without contact for {days_since_created} days",
            "lead_id": lead.id,
            "client_name": client_name,
        },
    )


def evaluate_payment_overdue(payment: Payment, now: datetime) -> NotificationCandidate | None:
    """Fire for payments pending for seven or more days."""

    if payment.status != PAYMENT_STATUS_PENDING or payment.created_at is None:
        return None

    days_pending = whole_days_between(payment.created_at, now)
    if days_pending < PAYMENT_OVERDUE_AFTER_DAYS:
        return None

    priority = PRIORITY_URGENT if days_pending >= PAYMENT_ESCALATION_DAYS else PRIORITY_HIGH
    client_name = payment.client_name or "Client"
    return NotificationCandidate(
        type=NOTIFICATION_TYPE_PAYMENT_OVERDUE,
        priority=priority,
        payload={
            "title": "Overdue payment",
            "message": f"Payment from {client_name} pending for {days_pending} days",
            "payment_id": payment.id,
            "client_name": client_name,
            "amount": str(payment.amount),
            "days_overdue": days_pending,
        },
    )


def evaluate_payment_reminder(payment: Payment, now: datetime) -> NotificationCandidate | None:
    """Fire for pending payments due today or within the next three days."""

    if payment.status != PAYMENT_STATUS_PENDING or payment.due_date is None:
        return None

    days_until_due = (payment.due_date - ensure_app_timezone(now).date()).days
    if not 0 <= days_until_due <= PAYMENT_REMINDER_WINDOW_DAYS:
        return None

    priority = (
        PRIORITY_HIGH if days_until_due <= PAYMENT_REMINDER_ESCALATION_DAYS else PRIORITY_MEDIUM
    )
    client_name = payment.client_name or "Client"
    when = "today" if days_until_due == 0 else f"in {days_until_due} days"
    return NotificationCandidate(
        type=NOTIFICATION_TYPE_PAYMENT_REMINDER,
        priority=priority,
        payload={
            "title": "Payment due soon",
            "message": f"Payment of {payment.amount} from {client_name} is due {when}",
            "payment_id": payment.id,
            "client_name": client_name,
            "amount": str(payment.amount),
            "due_date": payment.due_date.isoformat(),
            "days_until_due": days_until_due,
        },
    )

def evaluate_maintenance_reminder(
    resource: Resource, now: datetime
) -> NotificationCandidate | None:
    """Fire when maintenance is due today or within the next seven days."""

    if resource.next_maintenance_date is None:
        return None

    today = ensure_app_timezone(now).date()
    days_until = (resource.next_maintenance_date - today).days
    if not 0 <= days_until <= MAINTENANCE_WINDOW_DAYS:
        return None

    priority = PRIORITY_HIGH if days_until <= MAINTENANCE_ESCALATION_DAYS else PRIORITY_MEDIUM
    return NotificationCandidate(
        type=NOTIFICATION_TYPE_MAINTENANCE_REMINDER,
        priority=priority,
        payload={
            "title": "Maintenance due",
            "message": f"{resource.name} requires maintenance in {days_until} days",
            "resource_id": resource.id,
            "maintenance_date": resource.next_maintenance_date.isoformat(),
        },
    )


JOB_REMINDER_RULE = AutomationRule(
    type=NOTIFICATION_TYPE_JOB_REMINDER,
    reference_key="job_id",
    cooldown=timedelta(hours=24),
    settings_flag="job_reminders",
    evaluator=evaluate_job_reminder,
)
LEAD_FOLLOW_UP_RULE = AutomationRule(
    type=NOTIFICATION_TYPE_LEAD_FOLLOW_UP,
    reference_key="lead_id",
    cooldown=timedelta(hours=72),
    settings_flag="lead_follow_up",
    evaluator=evaluate_lead_follow_up,
)
PAYMENT_OVERDUE_RULE = AutomationRule(
    type=NOTIFICATION_TYPE_PAYMENT_OVERDUE,
    reference_key="payment_id",
    cooldown=timedelta(hours=168),
    settings_flag="payment_overdue",
    evaluator=evaluate_payment_overdue,
)
PAYMENT_REMINDER_RULE = AutomationRule(
    type=NOTIFICATION_TYPE_PAYMENT_REMINDER,
    reference_key="payment_id",
    cooldown=timedelta(hours=24),
    settings_flag="payment_overdue",
    evaluator=evaluate_payment_reminder,
)
MAINTENANCE_REMINDER_RULE = AutomationRule(
    type=NOTIFICATION_TYPE_MAINTENANCE_REMINDER,
    reference_key="resource_id",
    cooldown=timedelta(hours=168),
    settings_flag="maintenance_reminder",
    evaluator=evaluate_maintenance_reminder,
)

RULES: tuple[AutomationRule, ...] = (
    JOB_REMINDER_RULE,
    LEAD_FOLLOW_UP_RULE,
    PAYMENT_OVERDUE_RULE,
    PAYMENT_REMINDER_RULE,
    MAINTENANCE_REMINDER_RULE,
)

RULES_BY_TYPE: dict[str, AutomationRule] = {rule.type: rule for rule in RULES}


def cooldown_for(notification_type: str) -> timedelta:
    """Return the minimum spacing between two notifications for one entity."""

    rule = RULES_BY_TYPE.get(notification_type)
    return rule.cooldown if rule is not None else DEFAULT_COOLDOWN


__all__ = [
    "AutomationRule",
    "DEFAULT_COOLDOWN",
    "JOB_REMINDER_RULE",
    "LEAD_FOLLOW_UP_RULE",
    "MAINTENANCE_REMINDER_RULE",
    "NotificationCandidate",
    "PAYMENT_OVERDUE_RULE",
    "PAYMENT_REMINDER_RULE",
    "RULES",
    "RULES_BY_TYPE",
    "cooldown_for",
    "evaluate",
    "evaluate_job_reminder",
    "evaluate_lead_follow_up",
    "evaluate_maintenance_reminder",
    "evaluate_payment_overdue",
    "evaluate_payment_reminder",
]
