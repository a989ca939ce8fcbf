"""Integration tests for the notification checks against SQLite."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError

from opsdesk.application.use_cases.automation import (
    run_notification_checks,
    run_notification_checks_for_all,
)
from opsdesk.application.use_cases.automation import run_scheduler
from opsdesk.domain.entities import (
    INVOICE_STATUS_DRAFT,
    INVOICE_STATUS_ISSUED,
    JOB_STATUS_CONFIRMED,
    LEAD_STATUS_NEW,
    PAYMENT_STATUS_PENDING,
    Invoice,
    Job,
    Lead,
    Payment,
    Resource,
    User,
)
from opsdesk.infrastructure import database
from opsdesk.infrastructure.models import JobModel
from opsdesk.infrastructure.notifications import delivery
from opsdesk.infrastructure.repositories import (
    InvoiceRepository,
    JobRepository,
    LeadRepository,
    NotificationRepository,
    PaymentRepository,
    ResourceRepository,
    UserRepository,
)


def _create_job(session, owner, start):
    return JobRepository(session).create(
        Job(
            id=None,
            client_id=None,
            title="Product shoot",
            type="service",
            status=JOB_STATUS_CONFIRMED,
            start_datetime=start,
            estimated_revenue=Decimal("300"),
            created_by=owner.id,
        )
    )


def _create_lead(session, owner, created_at):
    return LeadRepository(session).create(
        Lead(id=None, client_id=None, status=LEAD_STATUS_NEW, created_by=owner.id, created_at=created_at)
    )


def _create_payment(session, owner, created_at, amount="120.00", due_date=None):
    return PaymentRepository(session).create(
        Payment(
            id=None,
            client_id=None,
            amount=Decimal(amount),
            status=PAYMENT_STATUS_PENDING,
            due_date=due_date,
            created_by=owner.id,
            created_at=created_at,
        )
    )


def _create_invoice(session, owner, number, due_date, status=INVOICE_STATUS_ISSUED):
    return InvoiceRepository(session).create(
        Invoice(
            id=None,
            user_id=owner.id,
            client_id=None,
            job_id=None,
            invoice_number=number,
            issue_date=due_date - timedelta(days=30),
            due_date=due_date,
            status=status,
            currency="AOA",
        )
    )

def test_job_reminder_end_to_end(session, owner, now):
    job = _create_job(session, owner, now + timedelta(hours=10))

    first = run_notification_checks(session, owner.id, now=now)

    assert first.as_dict() == {
        "recipient_id": owner.id,
        "created": 1,
        "evaluated": 1,
        "failed": 0,
        "invoices_marked_overdue": 0,
    }
    notifications = NotificationRepository(session).list_by_type(owner.id, "job_reminder")
    assert len(notifications) == 1
    assert notifications[0].priority == "high"
    assert notifications[0].payload["job_id"] == job.id
    assert notifications[0].created_at == now
    assert notifications[0].read is False

    second = run_notification_checks(session, owner.id, now=now + timedelta(hours=1))
    assert second.created == 0
    assert second.evaluated == 1

    third = run_notification_checks(session, owner.id, now=now + timedelta(hours=11))
    assert third.created == 0
    assert third.evaluated == 0
    assert len(NotificationRepository(session).list_by_type(owner.id, "job_reminder")) == 1


def test_job_reminder_fires_again_after_cooldown(session, owner, now):
    job = _create_job(session, owner, now + timedelta(hours=10))
    assert run_notification_checks(session, owner.id, now=now).created == 1

    # Rescheduled to later the same day the reminder went out.
    model = session.get(JobModel, job.id)
    model.start_datetime = (now + timedelta(hours=40)).replace(tzinfo=None)
    session.commit()

    blocked = run_notification_checks(session, owner.id, now=now + timedelta(hours=20))
    assert (blocked.created, blocked.evaluated) == (0, 1)

    refired = run_notification_checks(session, owner.id, now=now + timedelta(hours=25))
    assert (refired.created, refired.evaluated) == (1, 1)

    notifications = NotificationRepository(session).list_by_type(owner.id, "job_reminder")
    assert [n.created_at for n in notifications] == [now, now + timedelta(hours=25)]
    assert "in 15 hours" in notifications[1].message

def test_job_outside_window_is_not_evaluated(session, owner, now):
    _create_job(session, owner, now + timedelta(hours=25))
    _create_job(session, owner, now - timedelta(hours=1))

    result = run_notification_checks(session, owner.id, now=now)

    assert result.created == 0
    assert result.evaluated == 0


def test_lead_follow_up_respects_cooldown(session, owner, now):
    _create_lead(session, owner, now - timedelta(days=4))

    assert run_notification_checks(session, owner.id, now=now).created == 1
    assert run_notification_checks(session, owner.id, now=now + timedelta(hours=71)).created == 0
    assert run_notification_checks(session, owner.id, now=now + timedelta(hours=73)).created == 1

    notifications = NotificationRepository(session).list_by_type(owner.id, "lead_follow_up")
    assert [n.created_at for n in notifications] == [now, now + timedelta(hours=73)]


def test_disabled_rule_never_fires(session, make_recipient, now):
    owner = make_recipient(lead_follow_up=False)
    _create_lead(session, owner, now - timedelta(days=10))

    result = run_notification_checks(session, owner.id, now=now)

    assert result.created == 0
    assert result.evaluated == 0
    assert NotificationRepository(session).list_for_user(owner.id) == []


def test_payment_and_maintenance_rules(session, owner, now):
    _create_payment(session, owner, now - timedelta(days=15))
    _create_payment(session, owner, now - timedelta(days=2))
    ResourceRepository(session).create(
        Resource(
            id=None,
            name="Lighting kit",
            next_maintenance_date=now.date() + timedelta(days=1),
            created_by=owner.id,
        )
    )

    result = run_notification_checks(session, owner.id, now=now)

    assert result.created == 2
    assert result.evaluated == 3
    repository = NotificationRepository(session)
    [overdue] = repository.list_by_type(owner.id, "payment_overdue")
    assert overdue.priority == "urgent"
    assert overdue.payload["days_overdue"] == 15
    [maintenance] = repository.list_by_type(owner.id, "maintenance_reminder")
    assert maintenance.priority == "high"


def test_recipient_without_settings_gets_zero_counts(session, now):
    user = UserRepository(session).create(User(id=None, name="Nobody", email=None))

    result = run_notification_checks(session, user.id, now=now)

    assert (result.created, result.evaluated, result.failed) == (0, 0, 0)


def test_failing_entity_is_counted_and_skipped(session, owner, now, monkeypatch):
    _create_payment(session, owner, now - timedelta(days=9))
    _create_payment(session, owner, now - timedelta(days=8))
    original = run_scheduler.persist_notification
    calls = {"count": 0}

    def flaky(db, **kwargs):
        calls["count"] += 1
        if calls["count"] == 1:
            raise SQLAlchemyError("connection reset")
        return original(db, **kwargs)

    monkeypatch.setattr(run_scheduler, "persist_notification", flaky)

    result = run_notification_checks(session, owner.id, now=now)

    assert (result.created, result.evaluated, result.failed) == (1, 2, 1)


def test_failing_loader_does_not_stop_other_rules(session, owner, now):
    _create_lead(session, owner, now - timedelta(days=5))

    def broken_loader(*_args):
        raise RuntimeError("jobs table unavailable")

    loaders = dict(run_scheduler.ENTITY_LOADERS)
    loaders["job_reminder"] = broken_loader

    result = run_notification_checks(session, owner.id, now=now, loaders=loaders)

    assert result.failed == 1
    assert result.created == 1


def test_run_for_all_recipients(session, owner, make_recipient, now):
    inactive = make_recipient(name="Gone", email="gone@example.com", is_active=False)
    _create_lead(session, owner, now - timedelta(days=4))
    _create_lead(session, inactive, now - timedelta(days=4))
    UserRepository(session).create(User(id=None, name="No settings", email=None))

    results = run_notification_checks_for_all(database.SessionLocal, now=now)

    assert [result.recipient_id for result in results] == [owner.id]
    assert results[0].created == 1


def test_created_notifications_are_emailed_when_enabled(session, make_recipient, now, monkeypatch):
    owner = make_recipient(email_notifications=True)
    _create_lead(session, owner, now - timedelta(days=4))
    sent = []

    def fake_sender(email, notification_type, payload):
        sent.append((email, notification_type, payload["lead_id"]))
        return True

    monkeypatch.setattr(delivery, "send_notification_email", fake_sender)

    run_notification_checks(session, owner.id, now=now)

    assert len(sent) == 1
    assert sent[0][:2] == ("owner@example.com", "lead_follow_up")


def test_delivery_failure_does_not_fail_the_run(session, make_recipient, now, monkeypatch):
    owner = make_recipient(email_notifications=True)
    _create_lead(session, owner, now - timedelta(days=4))

    def broken_sender(*_args):
        raise ConnectionError("smtp down")

    monkeypatch.setattr(delivery, "send_notification_email", broken_sender)

    result = run_notification_checks(session, owner.id, now=now)

    assert result.created == 1
    assert result.failed == 0


def test_payment_due_soon_is_reminded_once_per_day(session, owner, now):
    payment = _create_payment(
        session, owner, now - timedelta(days=1), due_date=now.date() + timedelta(days=2)
    )

    first = run_notification_checks(session, owner.id, now=now)
    assert (first.created, first.evaluated) == (1, 2)
    assert run_notification_checks(session, owner.id, now=now + timedelta(hours=12)).created == 0
    assert run_notification_checks(session, owner.id, now=now + timedelta(hours=25)).created == 1

    reminders = NotificationRepository(session).list_by_type(owner.id, "payment_reminder")
    assert [n.payload["days_until_due"] for n in reminders] == [2, 1]
    assert [n.priority for n in reminders] == ["medium", "high"]
    assert reminders[0].payload["payment_id"] == payment.id
    assert reminders[0].payload["due_date"] == payment.due_date.isoformat()
    assert NotificationRepository(session).list_by_type(owner.id, "payment_overdue") == []


def test_payment_due_soon_follows_payment_setting(session, make_recipient, now):
    owner = make_recipient(payment_overdue=False)
    _create_payment(session, owner, now, due_date=now.date())

    result = run_notification_checks(session, owner.id, now=now)

    assert (result.created, result.evaluated) == (0, 0)


def test_issued_invoices_past_due_are_flagged_overdue(session, owner, make_recipient, now):
    today = now.date()
    _create_invoice(session, owner, "FT0001", today - timedelta(days=1))
    _create_invoice(session, owner, "FT0002", today)
    _create_invoice(session, owner, "FT0003", today - timedelta(days=5), INVOICE_STATUS_DRAFT)
    other = make_recipient(name="Other", email="other@example.com")
    _create_invoice(session, other, "FT0001", today - timedelta(days=1))

    result = run_notification_checks(session, owner.id, now=now)

    assert result.invoices_marked_overdue == 1
    assert result.failed == 0
    statuses = {
        invoice.invoice_number: invoice.status
        for invoice in InvoiceRepository(session).list_for_user(owner.id)
    }
    assert statuses == {"FT0001": "overdue", "FT0002": "issued", "FT0003": "draft"}
    [untouched] = InvoiceRepository(session).list_for_user(other.id)
    assert untouched.status == "issued"

    again = run_notification_checks(session, owner.id, now=now)
    assert again.invoices_marked_overdue == 0


def test_overdue_sweep_failure_does_not_stop_rules(session, owner, now, monkeypatch):
    _create_lead(session, owner, now - timedelta(days=4))

    def broken_sweep(self, user_id, *, today):
        raise SQLAlchemyError("invoices table locked")

    monkeypatch.setattr(InvoiceRepository, "mark_overdue", broken_sweep)

    result = run_notification_checks(session, owner.id, now=now)

    assert result.failed == 1
    assert result.created == 1
    assert result.invoices_marked_overdue == 0
