"""SQLAlchemy model for quotes."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, Numeric, String

from opsdesk.infrastructure.database import Base
from opsdesk.utils import now_in_app_naive_datetime


class QuoteModel(Base):
    __tablename__ = "quote"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client.id"), nullable=True, index=True)
    lead_id = Column(Integer, ForeignKey("lead.id"), nullable=True)
    job_id = Column(Integer, ForeignKey("job.id"), nullable=True)
    items = Column(JSON, nullable=False, default=list)
    total = Column(Numeric(12, 2), nullable=False, default=0)
    tax = Column(Numeric(12, 2), nullable=False, default=0)
    discount = Column(Numeric(12, 2), nullable=False, default=0)
    currency = Column(String(3), nullable=False)
    status = Column(String(30), nullable=False, default="draft")
    converted_to_job_at = Column(DateTime(), nullable=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["QuoteModel"]
