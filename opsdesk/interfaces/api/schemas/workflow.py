"""Pydantic models describing workflow executions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class WorkflowExecuteRequest(BaseModel):
    """Source record the workflow starts from."""

    source_id: int = Field(..., ge=1)
    source_data: dict[str, Any] = Field(default_factory=dict)


class CreatedEntityRead(BaseModel):
    type: str
    id: int


class WorkflowExecutionRead(BaseModel):
    """Outcome of a workflow execution, including partial results."""

    template: str
    source_id: int
    success: bool
    created_entities: list[CreatedEntityRead] = Field(default_factory=list)
    error: str | None = None


__all__ = ["CreatedEntityRead", "WorkflowExecuteRequest", "WorkflowExecutionRead"]
