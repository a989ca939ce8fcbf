"""Unit tests for the notification rule evaluators."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

import pytest

from opsdesk.application.use_cases.automation import cooldown_for, evaluate
from opsdesk.application.use_cases.automation.rules import (
    JOB_REMINDER_RULE,
    LEAD_FOLLOW_UP_RULE,
    MAINTENANCE_REMINDER_RULE,
    PAYMENT_OVERDUE_RULE,
    PAYMENT_REMINDER_RULE,
)
from opsdesk.domain.entities import (
    JOB_STATUS_CANCELLED,
    JOB_STATUS_COMPLETED,
    JOB_STATUS_CONFIRMED,
    LEAD_STATUS_NEW,
    LEAD_STATUS_WON,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PENDING,
    Job,
    Lead,
    NotificationSettings,
    Payment,
    Resource,
)


def _job(start, status=JOB_STATUS_CONFIRMED) -> Job:
    return Job(
        id=7,
        client_id=None,
        title="Wedding shoot",
        type="service",
        status=status,
        start_datetime=start,
        estimated_revenue=Decimal("100"),
        created_by=1,
    )


def _lead(created_at, status=LEAD_STATUS_NEW) -> Lead:
    return Lead(
        id=3, client_id=None, status=status, created_by=1, created_at=created_at, client_name="Ana"
    )


def _payment(created_at, status=PAYMENT_STATUS_PENDING, due_date=None) -> Payment:
    return Payment(
        id=5,
        client_id=None,
        amount=Decimal("250.00"),
        status=status,
        due_date=due_date,
        created_by=1,
        created_at=created_at,
    )


def test_job_reminder_fires_inside_window(now):
    candidate = evaluate(JOB_REMINDER_RULE, _job(now + timedelta(hours=10)), now)

    assert candidate is not None
    assert candidate.priority == "high"
    assert candidate.payload["job_id"] == 7
    assert candidate.reference_value == 7
    assert "in 10 hours" in candidate.payload["message"]


@pytest.mark.parametrize(
    "offset",
    [timedelta(hours=-1), timedelta(0), timedelta(hours=24, minutes=1), timedelta(days=3)],
)
def test_job_reminder_ignores_jobs_outside_window(now, offset):
    assert evaluate(JOB_REMINDER_RULE, _job(now + offset), now) is None


def test_job_reminder_upper_bound_is_inclusive(now):
    assert evaluate(JOB_REMINDER_RULE, _job(now + timedelta(hours=24)), now) is not None


@pytest.mark.parametrize("status", [JOB_STATUS_CANCELLED, JOB_STATUS_COMPLETED])
def test_job_reminder_skips_closed_jobs(now, status):
    assert evaluate(JOB_REMINDER_RULE, _job(now + timedelta(hours=2), status), now) is None


def test_job_reminder_with_less_than_an_hour_left(now):
    candidate = evaluate(JOB_REMINDER_RULE, _job(now + timedelta(minutes=20)), now)

    assert candidate is not None
    assert "less than an hour" in candidate.payload["message"]


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (timedelta(days=2, hours=23), None),
        (timedelta(days=3), "medium"),
        (timedelta(days=6, hours=23), "medium"),
        (timedelta(days=7), "high"),
        (timedelta(days=30), "high"),
    ],
)
def test_lead_follow_up_priority_by_age(now, age, expected):
    candidate = evaluate(LEAD_FOLLOW_UP_RULE, _lead(now - age), now)

    if expected is None:
        assert candidate is None
    else:
        assert candidate.priority == expected
        assert candidate.payload["lead_id"] == 3
        assert candidate.payload["client_name"] == "Ana"


def test_lead_follow_up_ignores_closed_leads(now):
    assert evaluate(LEAD_FOLLOW_UP_RULE, _lead(now - timedelta(days=10), LEAD_STATUS_WON), now) is None


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (timedelta(days=6, hours=23), None),
        (timedelta(days=7), "high"),
        (timedelta(days=13, hours=23), "high"),
        (timedelta(days=14), "urgent"),
    ],
)
def test_payment_overdue_priority_by_age(now, age, expected):
    candidate = evaluate(PAYMENT_OVERDUE_RULE, _payment(now - age), now)

    if expected is None:
        assert candidate is None
    else:
        assert candidate.priority == expected
        assert candidate.payload["payment_id"] == 5
        assert candidate.payload["amount"] == "250.00"
        assert candidate.payload["days_overdue"] == age.days


def test_payment_overdue_ignores_paid_payments(now):
    payment = _payment(now - timedelta(days=20), PAYMENT_STATUS_PAID)

    assert evaluate(PAYMENT_OVERDUE_RULE, payment, now) is None


@pytest.mark.parametrize(
    ("days_ahead", "expected"),
    [(-1, None), (0, "high"), (1, "high"), (2, "medium"), (3, "medium"), (4, None)],
)
def test_payment_reminder_window(now, days_ahead, expected):
    payment = _payment(now - timedelta(days=1), due_date=now.date() + timedelta(days=days_ahead))

    candidate = evaluate(PAYMENT_REMINDER_RULE, payment, now)

    if expected is None:
        assert candidate is None
    else:
        assert candidate.priority == expected
        assert candidate.payload["payment_id"] == 5
        assert candidate.payload["days_until_due"] == days_ahead
        assert candidate.payload["due_date"] == payment.due_date.isoformat()


def test_payment_reminder_ignores_paid_and_undated_payments(now):
    paid = _payment(now, PAYMENT_STATUS_PAID, due_date=now.date())

    assert evaluate(PAYMENT_REMINDER_RULE, paid, now) is None
    assert evaluate(PAYMENT_REMINDER_RULE, _payment(now), now) is None


@pytest.mark.parametrize(
    ("days_ahead", "expected"),
    [(-1, None), (0, "high"), (2, "high"), (3, "medium"), (7, "medium"), (8, None)],
)
def test_maintenance_reminder_window(now, days_ahead, expected):
    resource = Resource(
        id=9,
        name="Camera A",
        next_maintenance_date=now.date() + timedelta(days=days_ahead),
        created_by=1,
    )

    candidate = evaluate(MAINTENANCE_REMINDER_RULE, resource, now)

    if expected is None:
        assert candidate is None
    else:
        assert candidate.priority == expected
        assert candidate.payload["resource_id"] == 9


def test_rules_respect_settings_flags():
    settings = NotificationSettings(id=1, user_id=1, lead_follow_up=False)

    assert JOB_REMINDER_RULE.is_enabled(settings)
    assert not LEAD_FOLLOW_UP_RULE.is_enabled(settings)
    assert not JOB_REMINDER_RULE.is_enabled(None)


def test_cooldowns_per_type():
    assert cooldown_for("job_reminder") == timedelta(hours=24)
    assert cooldown_for("lead_follow_up") == timedelta(hours=72)
    assert cooldown_for("payment_overdue") == timedelta(hours=168)
    assert cooldown_for("payment_reminder") == timedelta(hours=24)
    assert cooldown_for("maintenance_reminder") == timedelta(hours=168)
    assert cooldown_for("new_lead") == timedelta(hours=24)
