"""Tests for the duplicate suppression gate."""

from __future__ import annotations

from datetime import timedelta

import pytest

from opsdesk.application.use_cases.automation import DeduplicationGate
from opsdesk.application.use_cases.notifications import persist_notification
from opsdesk.infrastructure.repositories import NotificationRepository


def _store(session, owner, created_at, *, lead_id=11):
    return persist_notification(
        session,
        recipient_id=owner.id,
        notification_type="lead_follow_up",
        payload={"title": "Follow-up needed", "message": "Call back", "lead_id": lead_id},
        created_at=created_at,
        deliver=False,
    )


def test_gate_allows_first_notification(session, owner, now):
    gate = DeduplicationGate(NotificationRepository(session))

    assert gate.should_create("lead_follow_up", owner.id, "lead_id", 11, now)


def test_gate_blocks_inside_cooldown_and_reopens_after(session, owner, now):
    _store(session, owner, now - timedelta(hours=71))
    gate = DeduplicationGate(NotificationRepository(session))

    assert not gate.should_create("lead_follow_up", owner.id, "lead_id", 11, now)
    assert gate.should_create(
        "lead_follow_up", owner.id, "lead_id", 11, now + timedelta(hours=2)
    )


def test_gate_is_scoped_to_entity_type_and_recipient(session, owner, make_recipient, now):
    _store(session, owner, now)
    other = make_recipient(name="Other", email="other@example.com")
    gate = DeduplicationGate(NotificationRepository(session))

    assert gate.should_create("lead_follow_up", owner.id, "lead_id", 12, now)
    assert gate.should_create("lead_follow_up", other.id, "lead_id", 11, now)
    assert gate.should_create("new_lead", owner.id, "lead_id", 11, now)


def test_gate_uses_latest_notification(session, owner, now):
    _store(session, owner, now - timedelta(days=10))
    _store(session, owner, now - timedelta(hours=1))
    gate = DeduplicationGate(NotificationRepository(session))

    assert not gate.should_create("lead_follow_up", owner.id, "lead_id", 11, now)


def test_gate_accepts_custom_cooldowns(session, owner, now):
    _store(session, owner, now - timedelta(hours=2))
    gate = DeduplicationGate(
        NotificationRepository(session), cooldowns=lambda _type: timedelta(hours=1)
    )

    assert gate.should_create("lead_follow_up", owner.id, "lead_id", 11, now)


def test_store_rejects_payload_without_reference(session, owner, now):
    with pytest.raises(ValueError):
        persist_notification(
            session,
            recipient_id=owner.id,
            notification_type="job_reminder",
            payload={"title": "Upcoming job"},
            created_at=now,
            deliver=False,
        )
