"""Domain types describing workflow templates and their executions."""

from __future__ import annotations

from dataclasses import dataclass, field

WORKFLOW_QUOTE_TO_JOB = "quote_to_job"
WORKFLOW_JOB_TO_INVOICE = "job_to_invoice"
WORKFLOW_PAYMENT_TO_RECEIPT = "payment_to_receipt"
WORKFLOW_LEAD_TO_QUOTE = "lead_to_quote"
WORKFLOW_JOB_COMPLETE_FLOW = "job_complete_flow"

WORKFLOW_TEMPLATES = (
    WORKFLOW_QUOTE_TO_JOB,
    WORKFLOW_JOB_TO_INVOICE,
    WORKFLOW_PAYMENT_TO_RECEIPT,
    WORKFLOW_LEAD_TO_QUOTE,
    WORKFLOW_JOB_COMPLETE_FLOW,
)

EXECUTION_STATE_PENDING = "pending"
EXECUTION_STATE_RUNNING = "running"
EXECUTION_STATE_SUCCEEDED = "success"
EXECUTION_STATE_FAILED = "failed"


@dataclass(frozen=True)
class CreatedEntity:
    """Reference to a domain record produced by a workflow step."""

    type: str
    id: int


@dataclass
class WorkflowExecutionResult:
    """Outcome handed back to the caller of a workflow execution.

    ``created_entities`` lists every record a step managed to create, including
    those produced before a failing step, so the caller can finish or discard
    the partial result by hand.
    """

    template: str
    source_id: int
    success: bool = False
    created_entities: list[CreatedEntity] = field(default_factory=list)
    error: str | None = None


__all__ = [
    "CreatedEntity",
    "EXECUTION_STATE_FAILED",
    "EXECUTION_STATE_PENDING",
    "EXECUTION_STATE_RUNNING",
    "EXECUTION_STATE_SUCCEEDED",
    "WORKFLOW_JOB_COMPLETE_FLOW",
    "WORKFLOW_JOB_TO_INVOICE",
    "WORKFLOW_LEAD_TO_QUOTE",
    "WORKFLOW_PAYMENT_TO_RECEIPT",
    "WORKFLOW_QUOTE_TO_JOB",
    "WORKFLOW_TEMPLATES",
    "WorkflowExecutionResult",
]
