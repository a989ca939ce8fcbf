"""Read-side use cases for a recipient's notification inbox."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from opsdesk.domain.entities import Notification
from opsdesk.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session, *, user_id: int, limit: int = 50
) -> Sequence[Notification]:
    return NotificationRepository(session).list_for_user(user_id, limit=limit)


def list_unread_notifications(
    session: Session, *, user_id: int, limit: int = 20
) -> Sequence[Notification]:
    return NotificationRepository(session).list_unread_for_user(user_id, limit=limit)


def count_unread_notifications(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).count_unread_for_user(user_id)


def mark_notifications_read(
    session: Session, *, user_id: int, notification_ids: Iterable[int]
) -> int:
    """Flip the read flag of the given notifications owned by ``user_id``."""

    return NotificationRepository(session).mark_as_read(notification_ids, user_id=user_id)


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id=user_id)


__all__ = [
    "count_unread_notifications",
    "list_notifications",
    "list_unread_notifications",
    "mark_all_notifications_read",
    "mark_notifications_read",
]
