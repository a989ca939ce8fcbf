"""Domain entity representing a sales lead."""

from dataclasses import dataclass
from datetime import datetime

LEAD_STATUS_NEW = "new"
LEAD_STATUS_CONTACTED = "contacted"
LEAD_STATUS_QUALIFIED = "qualified"
LEAD_STATUS_WON = "won"
LEAD_STATUS_LOST = "lost"

LEAD_TERMINAL_STATUSES = frozenset({LEAD_STATUS_WON, LEAD_STATUS_LOST})


@dataclass
class Lead:
    """Potential work not yet converted into a quote or job."""

    id: int | None
    client_id: int | None
    status: str
    created_by: int
    created_at: datetime | None
    client_name: str | None = None

    def is_open(self) -> bool:
        return self.status not in LEAD_TERMINAL_STATUSES


__all__ = [
    "Lead",
    "LEAD_STATUS_CONTACTED",
    "LEAD_STATUS_LOST",
    "LEAD_STATUS_NEW",
    "LEAD_STATUS_QUALIFIED",
    "LEAD_STATUS_WON",
    "LEAD_TERMINAL_STATUSES",
]
