"""Endpoint triggering the notification checks on demand."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from opsdesk.application.use_cases.automation import run_notification_checks
from opsdesk.domain.entities import User
from opsdesk.infrastructure.database import get_db
from opsdesk.interfaces.api.dependencies import get_current_user
from opsdesk.interfaces.api.schemas import AutomationRunRead

router = APIRouter(prefix="/automation", tags=["automation"])


@router.post("/run", response_model=AutomationRunRead)
def run_checks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AutomationRunRead:
    """Evaluate the caller's rules now; repeats inside the cooldown are suppressed."""

    result = run_notification_checks(db, current_user.id)
    return AutomationRunRead(
        created=result.created,
        evaluated=result.evaluated,
        failed=result.failed,
        invoices_marked_overdue=result.invoices_marked_overdue,
    )
