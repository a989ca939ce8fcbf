"""SQLAlchemy model for contracts."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, JSON, String

from opsdesk.infrastructure.database import Base
from opsdesk.utils import now_in_app_naive_datetime


class ContractModel(Base):
    __tablename__ = "contract"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("client.id"), nullable=True, index=True)
    job_id = Column(Integer, ForeignKey("job.id"), nullable=True)
    status = Column(String(30), nullable=False, default="draft")
    clauses = Column(JSON, nullable=False, default=dict)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ContractModel"]
