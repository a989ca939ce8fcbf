"""Utility helpers to generate and dispatch domain notifications."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from opsdesk.domain.entities import (
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPE_JOB_COMPLETED,
    PRIORITY_MEDIUM,
    Notification,
)
from opsdesk.infrastructure.notifications import deliver_notification
from opsdesk.infrastructure.repositories import NotificationRepository
from opsdesk.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)


def persist_notification(
    session: Session,
    *,
    recipient_id: int,
    notification_type: str,
    payload: dict[str, Any],
    priority: str = PRIORITY_MEDIUM,
    created_at: datetime | None = None,
    deliver: bool = True,
) -> Notification:
    """Store a notification and hand it to the delivery adapter.

    Raises ``ValueError`` when the payload lacks the entity reference required
    by ``notification_type`` or the priority is unknown.
    """

    if priority not in NOTIFICATION_PRIORITIES:
        raise ValueError(f"Unknown notification priority: {priority}")

    notification = Notification(
        id=None,
        recipient_id=recipient_id,
        type=notification_type,
        payload=dict(payload),
        priority=priority,
        read=False,
        created_at=ensure_app_timezone(created_at) or now_in_app_timezone(),
    )
    saved = NotificationRepository(session).create(notification)
    logger.info(
        "Created %s notification %s for recipient %s (%s=%s)",
        saved.type,
        saved.id,
        saved.recipient_id,
        saved.reference_key,
        saved.reference_id,
    )
    if deliver:
        deliver_notification(session, saved)
    return saved


def notify_job_completed(
    session: Session,
    *,
    recipient_id: int,
    job_id: int,
    job_title: str | None = None,
    created_at: datetime | None = None,
) -> Notification:
    """Tell the owner a job was closed and its invoice issued."""

    title = job_title or "Job"
    return persist_notification(
        session,
        recipient_id=recipient_id,
        notification_type=NOTIFICATION_TYPE_JOB_COMPLETED,
        payload={
            "title": "Job completed",
            "message": f'"{title}" was completed. An invoice was created automatically.',
            "job_id": job_id,
        },
        priority=PRIORITY_MEDIUM,
        created_at=created_at,
    )


__all__ = ["notify_job_completed", "persist_notification"]
