"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from opsdesk.domain.entities import Notification, reference_key_for
from opsdesk.infrastructure.models import NotificationModel
from opsdesk.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Append-only store for :class:`Notification` objects.

    Rows are only ever inserted or have their ``read`` flag flipped; retention
    is handled outside this service.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.recipient_id == user_id)
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 20
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == user_id)
            .filter(NotificationModel.read.is_(False))
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread_for_user(self, user_id: int) -> int:
        count = (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.recipient_id == user_id)
            .filter(NotificationModel.read.is_(False))
            .scalar()
        )
        return int(count or 0)

    def list_by_type(
        self, user_id: int, notification_type: str
    ) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == user_id)
            .filter(NotificationModel.type == notification_type)
            .order_by(NotificationModel.created_at.asc(), NotificationModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get_latest_by_reference(
        self,
        *,
        recipient_id: int,
        notification_type: str,
        reference_key: str,
        reference_id: object,
    ) -> Notification | None:
        """Return the newest notification of a type pointing at one entity."""

        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .filter(NotificationModel.type == notification_type)
            .filter(NotificationModel.reference_key == reference_key)
            .filter(NotificationModel.reference_id == str(reference_id))
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        reference_key = reference_key_for(notification.type)
        reference_id = (notification.payload or {}).get(reference_key)
        if reference_id is None:
            msg = (
                f"Notification payload for '{notification.type}' must include "
                f"'{reference_key}'"
            )
            raise ValueError(msg)

        model = NotificationModel(
            recipient_id=notification.recipient_id,
            type=notification.type,
            reference_key=reference_key,
            reference_id=str(reference_id),
            payload=dict(notification.payload),
            priority=notification.priority,
            read=notification.read,
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.recipient_id == user_id,
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated or 0)

    def mark_all_as_read(self, *, user_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.recipient_id == user_id,
                NotificationModel.read.is_(False),
            )
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return int(updated or 0)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            type=model.type,
            payload=dict(model.payload or {}),
            priority=model.priority,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
