"""Endpoints for the recipient's notification inbox."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from opsdesk.application.use_cases.notifications import (
    count_unread_notifications,
    list_notifications as list_notifications_uc,
    list_unread_notifications,
    mark_all_notifications_read,
    mark_notifications_read,
)
from opsdesk.domain.entities import Notification, User
from opsdesk.infrastructure.database import get_db
from opsdesk.interfaces.api.dependencies import get_current_user
from opsdesk.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationsUpdatedRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        recipient_id=notification.recipient_id,
        type=notification.type,
        priority=notification.priority,
        title=notification.title,
        message=notification.message,
        payload=notification.payload or {},
        read=notification.read,
        created_at=notification.created_at,
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the caller."""

    notifications = list_notifications_uc(db, user_id=current_user.id)
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread", response_model=list[NotificationRead])
def list_unread(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    notifications = list_unread_notifications(db, user_id=current_user.id)
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread/count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    return UnreadCountRead(count=count_unread_notifications(db, user_id=current_user.id))


@router.post("/read", response_model=NotificationsUpdatedRead)
def mark_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationsUpdatedRead:
    """Mark the given notifications as read; ids owned by others are ignored."""

    updated = mark_notifications_read(
        db, user_id=current_user.id, notification_ids=payload.unique_ids()
    )
    return NotificationsUpdatedRead(updated=updated)


@router.post("/read-all", response_model=NotificationsUpdatedRead)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationsUpdatedRead:
    return NotificationsUpdatedRead(updated=mark_all_notifications_read(db, user_id=current_user.id))
