"""Persistence helpers for automation preferences."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from opsdesk.domain.entities import NotificationSettings
from opsdesk.infrastructure.models import NotificationSettingsModel, UserModel
from opsdesk.utils import ensure_app_timezone

_FLAG_FIELDS = (
    "job_reminders",
    "lead_follow_up",
    "payment_overdue",
    "maintenance_reminder",
    "new_lead",
    "job_completed",
    "email_notifications",
)


class NotificationSettingsRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_user(self, user_id: int) -> NotificationSettings | None:
        model = (
            self.session.query(NotificationSettingsModel)
            .filter(NotificationSettingsModel.user_id == user_id)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def list_recipient_ids(self) -> Sequence[int]:
        """Return active users that have an automation settings record."""

        rows = (
            self.session.query(NotificationSettingsModel.user_id)
            .join(UserModel, UserModel.id == NotificationSettingsModel.user_id)
            .filter(UserModel.is_active.is_(True))
            .order_by(NotificationSettingsModel.user_id.asc())
            .all()
        )
        return [row.user_id for row in rows]

    def create(self, settings: NotificationSettings) -> NotificationSettings:
        model = NotificationSettingsModel(user_id=settings.user_id)
        for name in _FLAG_FIELDS:
            setattr(model, name, bool(getattr(settings, name)))
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: NotificationSettingsModel) -> NotificationSettings:
        flags = {name: bool(getattr(model, name)) for name in _FLAG_FIELDS}
        return NotificationSettings(
            id=model.id,
            user_id=model.user_id,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            **flags,
        )


__all__ = ["NotificationSettingsRepository"]
