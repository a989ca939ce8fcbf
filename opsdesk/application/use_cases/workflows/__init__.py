"""Workflow use cases."""

from .execute_workflow import TEMPLATE_NOT_FOUND, WorkflowOrchestrator, execute_workflow
from .execution import WorkflowError, WorkflowExecution, WorkflowStepError
from .templates import WORKFLOW_HANDLERS, WorkflowContext

__all__ = [
    "TEMPLATE_NOT_FOUND",
    "WORKFLOW_HANDLERS",
    "WorkflowContext",
    "WorkflowError",
    "WorkflowExecution",
    "WorkflowOrchestrator",
    "WorkflowStepError",
    "execute_workflow",
]
