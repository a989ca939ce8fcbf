"""SQLAlchemy model for business clients."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from opsdesk.infrastructure.database import Base
from opsdesk.utils import now_in_app_naive_datetime


class ClientModel(Base):
    __tablename__ = "client"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    email = Column(String(120), nullable=True)
    phone = Column(String(40), nullable=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ClientModel"]
