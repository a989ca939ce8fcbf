"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, JSON, String
from sqlalchemy.sql import expression

from opsdesk.infrastructure.database import Base
from opsdesk.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for recipient notifications.

    ``reference_key``/``reference_id`` duplicate the entity reference carried in
    ``payload`` so cooldown lookups stay an indexed query. They are weak
    references: no foreign key, the notification outlives the entity.
    """

    __tablename__ = "notification"
    __table_args__ = (
        Index(
            "ix_notification_dedup",
            "recipient_id",
            "type",
            "reference_id",
            "created_at",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False)
    reference_key = Column(String(50), nullable=False)
    reference_id = Column(String(64), nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    priority = Column(String(20), nullable=False, default="medium")
    read = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel"]
