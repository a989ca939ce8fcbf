"""SQLAlchemy model for invoices."""

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    JSON,
    Numeric,
    String,
    UniqueConstraint,
)

from opsdesk.infrastructure.database import Base
from opsdesk.utils import now_in_app_naive_datetime


class InvoiceModel(Base):
    __tablename__ = "invoice"
    __table_args__ = (
        UniqueConstraint("user_id", "invoice_number", name="uq_invoice_user_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("client.id"), nullable=True, index=True)
    job_id = Column(Integer, ForeignKey("job.id"), nullable=True)
    invoice_number = Column(String(40), nullable=False)
    issue_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    items = Column(JSON, nullable=False, default=list)
    subtotal = Column(Numeric(12, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(12, 2), nullable=False, default=0)
    total = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(30), nullable=False, default="issued")
    currency = Column(String(3), nullable=False)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["InvoiceModel"]
