"""Fan persisted notifications out to secondary channels."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy.orm import Session

from opsdesk.domain.entities import Notification
from opsdesk.infrastructure.email import send_notification_email
from opsdesk.infrastructure.repositories import (
    NotificationSettingsRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

EmailSender = Callable[[str, str, Mapping[str, Any]], bool]


class NotificationDeliveryAdapter:
    """Email a notification to its recipient when they opted in.

    Delivery is best effort: any failure is logged and reported as ``False``
    so the run that created the notification is never affected.
    """

    def __init__(self, session: Session, *, sender: EmailSender | None = None) -> None:
        self._session = session
        self._sender = sender or send_notification_email

    def deliver(self, notification: Notification) -> bool:
        try:
            settings = NotificationSettingsRepository(self._session).get_for_user(
                notification.recipient_id
            )
            if settings is None or not settings.email_notifications:
                return False

            user = UserRepository(self._session).get(notification.recipient_id)
            if user is None or not user.email:
                logger.debug(
                    "Recipient %s has no email address; skipping delivery",
                    notification.recipient_id,
                )
                return False

            return bool(self._sender(user.email, notification.type, notification.payload))
        except Exception:
            logger.exception(
                "Failed to deliver notification %s (%s) to recipient %s",
                notification.id,
                notification.type,
                notification.recipient_id,
            )
            return False


def deliver_notification(session: Session, notification: Notification) -> bool:
    """Public helper that delegates to :class:`NotificationDeliveryAdapter`."""

    return NotificationDeliveryAdapter(session).deliver(notification)


__all__ = ["EmailSender", "NotificationDeliveryAdapter", "deliver_notification"]
