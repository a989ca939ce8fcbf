"""SQLAlchemy model for maintained resources (equipment, vehicles)."""

from sqlalchemy import Column, Date, ForeignKey, Integer, String

from opsdesk.infrastructure.database import Base


class ResourceModel(Base):
    __tablename__ = "resource"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(120), nullable=False)
    next_maintenance_date = Column(Date, nullable=True, index=True)
    created_by = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)


__all__ = ["ResourceModel"]
