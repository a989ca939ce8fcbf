"""SQLAlchemy model for jobs."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, String

from opsdesk.infrastructure.database import Base
from opsdesk.utils import now_in_app_naive_datetime


class JobModel(Base):
    __tablename__ = "job"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client.id"), nullable=True, index=True)
    title = Column(String(200), nullable=False)
    type = Column(String(50), nullable=True)
    status = Column(String(30), nullable=False, default="scheduled")
    start_datetime = Column(DateTime(), nullable=True, index=True)
    estimated_revenue = Column(Numeric(12, 2), nullable=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["JobModel"]
