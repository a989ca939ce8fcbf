"""Domain entity representing a scheduled job."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

JOB_STATUS_SCHEDULED = "scheduled"
JOB_STATUS_CONFIRMED = "confirmed"
JOB_STATUS_COMPLETED = "completed"
JOB_STATUS_CANCELLED = "cancelled"


@dataclass
class Job:
    """A unit of service work booked for a client."""

    id: int | None
    client_id: int | None
    title: str
    type: str | None
    status: str
    start_datetime: datetime | None
    estimated_revenue: Decimal | None
    created_by: int
    created_at: datetime | None = None


__all__ = [
    "Job",
    "JOB_STATUS_CANCELLED",
    "JOB_STATUS_COMPLETED",
    "JOB_STATUS_CONFIRMED",
    "JOB_STATUS_SCHEDULED",
]
