"""SQLAlchemy model for business invoicing preferences."""

from sqlalchemy import Column, ForeignKey, Integer, String

from opsdesk.infrastructure.database import Base


class BusinessSettingsModel(Base):
    """Holds the invoice counter shared by every invoice a user issues."""

    __tablename__ = "business_settings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, unique=True)
    business_name = Column(String(120), nullable=True)
    invoice_prefix = Column(String(20), nullable=True)
    next_invoice_number = Column(Integer, nullable=False, default=1)
    currency = Column(String(3), nullable=True)


__all__ = ["BusinessSettingsModel"]
