"""SQLAlchemy model for sales leads."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from opsdesk.infrastructure.database import Base
from opsdesk.utils import now_in_app_naive_datetime


class LeadModel(Base):
    __tablename__ = "lead"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client.id"), nullable=True, index=True)
    status = Column(String(30), nullable=False, default="new")
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    client = relationship("ClientModel", lazy="joined")


__all__ = ["LeadModel"]
