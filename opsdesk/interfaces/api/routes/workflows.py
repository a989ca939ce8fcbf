"""Endpoint executing workflow templates."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from opsdesk.application.use_cases.workflows import TEMPLATE_NOT_FOUND, execute_workflow
from opsdesk.domain.entities import User, WorkflowExecutionResult
from opsdesk.infrastructure.database import get_db
from opsdesk.interfaces.api.dependencies import get_current_user
from opsdesk.interfaces.api.schemas import (
    CreatedEntityRead,
    WorkflowExecuteRequest,
    WorkflowExecutionRead,
)

router = APIRouter(prefix="/workflows", tags=["workflows"])


def _result_to_schema(result: WorkflowExecutionResult) -> WorkflowExecutionRead:
    return WorkflowExecutionRead(
        template=result.template,
        source_id=result.source_id,
        success=result.success,
        created_entities=[
            CreatedEntityRead(type=entity.type, id=entity.id)
            for entity in result.created_entities
        ],
        error=result.error,
    )


@router.post("/{template}", response_model=WorkflowExecutionRead)
def run_workflow(
    template: str,
    payload: WorkflowExecuteRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> WorkflowExecutionRead:
    """Run ``template`` for the given source record.

    Failed executions are still answered with 200 so the caller receives the
    entities created before the failing step.
    """

    result = execute_workflow(
        db,
        user_id=current_user.id,
        template=template,
        source_id=payload.source_id,
        source_data=payload.source_data,
    )
    if not result.success and result.error == TEMPLATE_NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TEMPLATE_NOT_FOUND)
    return _result_to_schema(result)
