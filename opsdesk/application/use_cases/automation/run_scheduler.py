"""Use case scanning a recipient's records and emitting due notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from opsdesk.application.use_cases.notifications import persist_notification
from opsdesk.domain.entities import (
    NOTIFICATION_TYPE_JOB_REMINDER,
    NOTIFICATION_TYPE_LEAD_FOLLOW_UP,
    NOTIFICATION_TYPE_MAINTENANCE_REMINDER,
    NOTIFICATION_TYPE_PAYMENT_OVERDUE,
    NOTIFICATION_TYPE_PAYMENT_REMINDER,
)
from opsdesk.infrastructure.repositories import (
    InvoiceRepository,
    JobRepository,
    LeadRepository,
    NotificationRepository,
    NotificationSettingsRepository,
    PaymentRepository,
    ResourceRepository,
)
from opsdesk.utils import ensure_app_timezone, now_in_app_timezone

from .dedup import DeduplicationGate
from .rules import (
    JOB_REMINDER_WINDOW_HOURS,
    MAINTENANCE_WINDOW_DAYS,
    PAYMENT_REMINDER_WINDOW_DAYS,
    RULES,
    AutomationRule,
    evaluate,
)

logger = logging.getLogger(__name__)

EntityLoader = Callable[[Session, int, datetime], Sequence[Any]]


@dataclass
class SchedulerRunResult:
    """Counters reported by one scheduler run for one recipient."""

    recipient_id: int
    created: int = 0
    evaluated: int = 0
    failed: int = 0
    invoices_marked_overdue: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


def _load_upcoming_jobs(session: Session, recipient_id: int, now: datetime) -> Sequence[Any]:
    return JobRepository(session).list_starting_between(
        recipient_id, start=now, end=now + timedelta(hours=JOB_REMINDER_WINDOW_HOURS)
    )


def _load_open_leads(session: Session, recipient_id: int, now: datetime) -> Sequence[Any]:
    return LeadRepository(session).list_open_for_owner(recipient_id)


def _load_pending_payments(session: Session, recipient_id: int, now: datetime) -> Sequence[Any]:
    return PaymentRepository(session).list_pending_for_owner(recipient_id)


def _load_payments_due_soon(session: Session, recipient_id: int, now: datetime) -> Sequence[Any]:
    today = now.date()
    return PaymentRepository(session).list_pending_due_between(
        recipient_id, start=today, end=today + timedelta(days=PAYMENT_REMINDER_WINDOW_DAYS)
    )


def _load_resources_due(session: Session, recipient_id: int, now: datetime) -> Sequence[Any]:
    today = now.date()
    return ResourceRepository(session).list_with_maintenance_between(
        recipient_id, start=today, end=today + timedelta(days=MAINTENANCE_WINDOW_DAYS)
    )


ENTITY_LOADERS: dict[str, EntityLoader] = {
    NOTIFICATION_TYPE_JOB_REMINDER: _load_upcoming_jobs,
    NOTIFICATION_TYPE_LEAD_FOLLOW_UP: _load_open_leads,
    NOTIFICATION_TYPE_PAYMENT_OVERDUE: _load_pending_payments,
    NOTIFICATION_TYPE_PAYMENT_REMINDER: _load_payments_due_soon,
    NOTIFICATION_TYPE_MAINTENANCE_REMINDER: _load_resources_due,
}


def _sweep_overdue_invoices(
    session: Session, recipient_id: int, now: datetime, result: SchedulerRunResult
) -> None:
    try:
        result.invoices_marked_overdue = InvoiceRepository(session).mark_overdue(
            recipient_id, today=now.date()
        )
    except Exception:
        session.rollback()
        result.failed += 1
        logger.exception("Failed to flag overdue invoices for recipient %s", recipient_id)
        return
    if result.invoices_marked_overdue:
        logger.info(
            "Marked %s invoices overdue for recipient %s",
            result.invoices_marked_overdue,
            recipient_id,
        )


def _process_snapshot(
    session: Session,
    gate: DeduplicationGate,
    rule: AutomationRule,
    snapshot: Any,
    *,
    recipient_id: int,
    now: datetime,
    deliver: bool,
) -> bool:
    candidate = evaluate(rule, snapshot, now)
    if candidate is None:
        return False

    if not gate.should_create(
        candidate.type,
        recipient_id,
        rule.reference_key,
        candidate.reference_value,
        now,
    ):
        logger.debug(
            "Suppressed %s for %s=%s inside cooldown",
            candidate.type,
            rule.reference_key,
            candidate.reference_value,
        )
        return False

    persist_notification(
        session,
        recipient_id=recipient_id,
        notification_type=candidate.type,
        payload=candidate.payload,
        priority=candidate.priority,
        created_at=now,
        deliver=deliver,
    )
    return True


def run_notification_checks(
    session: Session,
    recipient_id: int,
    *,
    now: datetime | None = None,
    rules: Iterable[AutomationRule] = RULES,
    loaders: dict[str, EntityLoader] | None = None,
    deliver: bool = True,
) -> SchedulerRunResult:
    """Evaluate every enabled rule for ``recipient_id`` and store new notifications.

    Issued invoices past their due date are flagged overdue first.
    Failures loading a collection or handling a single entity are logged,
    counted in ``failed`` and skipped; they never abort the run.
    """

    current_time = ensure_app_timezone(now) or now_in_app_timezone()
    entity_loaders = loaders if loaders is not None else ENTITY_LOADERS
    result = SchedulerRunResult(recipient_id=recipient_id)
    _sweep_overdue_invoices(session, recipient_id, current_time, result)

    settings = NotificationSettingsRepository(session).get_for_user(recipient_id)
    if settings is None:
        logger.info("No notification settings for recipient %s; nothing to check", recipient_id)
        return result

    gate = DeduplicationGate(NotificationRepository(session))

    for rule in rules:
        if not rule.is_enabled(settings):
            logger.debug("Rule %s disabled for recipient %s", rule.type, recipient_id)
            continue

        try:
            snapshots = entity_loaders[rule.type](session, recipient_id, current_time)
        except Exception:
            session.rollback()
            result.failed += 1
            logger.exception(
                "Failed to load entities for rule %s (recipient %s)", rule.type, recipient_id
            )
            continue

        for snapshot in snapshots:
            result.evaluated += 1
            try:
                created = _process_snapshot(
                    session,
                    gate,
                    rule,
                    snapshot,
                    recipient_id=recipient_id,
                    now=current_time,
                    deliver=deliver,
                )
            except Exception:
                session.rollback()
                result.failed += 1
                logger.exception(
                    "Failed to evaluate rule %s for entity %s (recipient %s)",
                    rule.type,
                    getattr(snapshot, "id", None),
                    recipient_id,
                )
                continue
            if created:
                result.created += 1

    logger.info(
        "Notification check for recipient %s: created=%s evaluated=%s failed=%s overdue=%s",
        recipient_id,
        result.created,
        result.evaluated,
        result.failed,
        result.invoices_marked_overdue,
    )
    return result


def run_notification_checks_for_all(
    session_factory: Callable[[], Session],
    *,
    now: datetime | None = None,
) -> list[SchedulerRunResult]:
    """Run the checks for every active recipient, one session per recipient."""

    with session_factory() as session:
        recipient_ids = list(NotificationSettingsRepository(session).list_recipient_ids())

    results: list[SchedulerRunResult] = []
    for recipient_id in recipient_ids:
        with session_factory() as session:
            try:
                results.append(run_notification_checks(session, recipient_id, now=now))
            except Exception:
                logger.exception("Notification check failed for recipient %s", recipient_id)
    return results


__all__ = [
    "ENTITY_LOADERS",
    "EntityLoader",
    "SchedulerRunResult",
    "run_notification_checks",
    "run_notification_checks_for_all",
]
