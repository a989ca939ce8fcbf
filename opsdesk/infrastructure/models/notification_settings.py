"""SQLAlchemy model for per-user automation preferences."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer

from opsdesk.infrastructure.database import Base
from opsdesk.utils import now_in_app_naive_datetime


class NotificationSettingsModel(Base):
    __tablename__ = "notification_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, unique=True)
    job_reminders = Column(Boolean, nullable=False, default=True)
    lead_follow_up = Column(Boolean, nullable=False, default=True)
    payment_overdue = Column(Boolean, nullable=False, default=True)
    maintenance_reminder = Column(Boolean, nullable=False, default=True)
    new_lead = Column(Boolean, nullable=False, default=True)
    job_completed = Column(Boolean, nullable=False, default=True)
    email_notifications = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["NotificationSettingsModel"]
