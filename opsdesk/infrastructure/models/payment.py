"""SQLAlchemy model for client payments."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from opsdesk.infrastructure.database import Base
from opsdesk.utils import now_in_app_naive_datetime


class PaymentModel(Base):
    __tablename__ = "payment"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client.id"), nullable=True, index=True)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(30), nullable=False, default="pending")
    due_date = Column(Date, nullable=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    client = relationship("ClientModel", lazy="joined")


__all__ = ["PaymentModel"]
