"""Step sequences for every workflow template.

Each function receives the running :class:`WorkflowExecution`, the id of the
source record and the caller supplied source data. Steps run strictly in order
because later steps use ids produced by earlier ones.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from opsdesk.application.use_cases.notifications import notify_job_completed
from opsdesk.config import Settings
from opsdesk.domain.entities import (
    CONTRACT_STATUS_DRAFT,
    INVOICE_STATUS_ISSUED,
    JOB_STATUS_COMPLETED,
    JOB_STATUS_CONFIRMED,
    PAYMENT_STATUS_PAID,
    QUOTE_STATUS_DRAFT,
    WORKFLOW_JOB_COMPLETE_FLOW,
    WORKFLOW_JOB_TO_INVOICE,
    WORKFLOW_LEAD_TO_QUOTE,
    WORKFLOW_PAYMENT_TO_RECEIPT,
    WORKFLOW_QUOTE_TO_JOB,
    Contract,
    Invoice,
    Job,
    Quote,
    format_invoice_number,
)
from opsdesk.infrastructure.repositories import (
    BusinessSettingsRepository,
    ContractRepository,
    InvoiceRepository,
    JobRepository,
    LeadRepository,
    PaymentRepository,
    QuoteRepository,
)

from .execution import WorkflowError, WorkflowExecution

logger = logging.getLogger(__name__)

DEFAULT_JOB_TYPE = "service"
DEFAULT_SERVICE_DESCRIPTION = "Service"


@dataclass(frozen=True)
class WorkflowContext:
    """Values shared by every step of one execution."""

    user_id: int
    settings: Settings
    clock: Callable[[], datetime]


def _decimal(value: Any) -> Decimal:
    if value in (None, ""):
        return Decimal("0")
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise WorkflowError(f"Invalid amount: {value!r}") from None


def _optional_int(value: Any) -> int | None:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise WorkflowError(f"Invalid identifier: {value!r}") from None


def _as_datetime(value: Any, default: datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            raise WorkflowError(f"Invalid date: {value!r}") from None
    return default


def _client_name(data: Mapping[str, Any]) -> str | None:
    client = data.get("client")
    if isinstance(client, Mapping) and client.get("name"):
        return str(client["name"])
    name = data.get("client_name")
    return str(name) if name else None


def _require(record, kind: str, record_id: int):
    if record is None:
        raise WorkflowError(f"{kind} {record_id} not found")
    return record


def quote_to_job(
    execution: WorkflowExecution,
    context: WorkflowContext,
    quote_id: int,
    data: Mapping[str, Any],
) -> None:
    """Accepted quote: create the job, link it to the quote, draft a contract."""

    session = execution.session
    now = context.clock()
    quote = _require(
        QuoteRepository(session).get_for_owner(quote_id, context.user_id), "Quote", quote_id
    )
    total = _decimal(data.get("total", quote.total))
    currency = data.get("currency") or quote.currency or context.settings.default_currency
    client_id = _optional_int(data.get("client_id", quote.client_id))
    execution.set_progress(20)

    job = execution.run_step(
        "create_job",
        lambda: JobRepository(session).create(
            Job(
                id=None,
                client_id=client_id,
                title=f"Job - {_client_name(data) or 'Client'}",
                type=data.get("job_type") or DEFAULT_JOB_TYPE,
                status=JOB_STATUS_CONFIRMED,
                start_datetime=_as_datetime(data.get("start_datetime"), now),
                estimated_revenue=total,
                created_by=context.user_id,
            )
        ),
    )
    execution.record("job", job.id)
    execution.set_progress(50)

    execution.run_optional_step(
        "link_quote",
        lambda: QuoteRepository(session).link_job(
            quote_id, job_id=job.id, converted_at=now, owner_id=context.user_id
        ),
    )
    execution.set_progress(70)

    contract = execution.run_optional_step(
        "create_contract",
        lambda: ContractRepository(session).create(
            Contract(
                id=None,
                client_id=client_id,
                job_id=job.id,
                status=CONTRACT_STATUS_DRAFT,
                created_by=context.user_id,
                clauses={
                    "payment_terms": f"Amount: {total} {currency}",
                    "services": "As described in the approved quote",
                },
            )
        ),
    )
    if contract is not None:
        execution.record("contract", contract.id)
    execution.set_progress(100)


def job_to_invoice(
    execution: WorkflowExecution,
    context: WorkflowContext,
    job_id: int,
    data: Mapping[str, Any],
    *,
    final_progress: int = 100,
) -> None:
    """Completed job: issue an invoice with the next number of the series.

    The counter is advanced by a compare-and-set that commits together with the
    invoice insert, so a failed insert does not consume a number.
    """

    session = execution.session
    execution.set_progress(30)

    settings_repository = BusinessSettingsRepository(session)
    business = settings_repository.get_for_user(context.user_id)
    if business is None:
        raise WorkflowError("Invoice numbering settings not found")

    job = _require(
        JobRepository(session).get_for_owner(job_id, context.user_id), "Job", job_id
    )
    revenue = _decimal(data.get("estimated_revenue", job.estimated_revenue))
    description = data.get("title") or job.title or DEFAULT_SERVICE_DESCRIPTION
    client_id = _optional_int(data.get("client_id", job.client_id))
    prefix = business.invoice_prefix or context.settings.default_invoice_prefix
    currency = business.currency or context.settings.default_currency
    issue_date = context.clock().date()

    def _create_invoice() -> Invoice:
        number = settings_repository.claim_next_invoice_number(context.user_id)
        return InvoiceRepository(session).create(
            Invoice(
                id=None,
                user_id=context.user_id,
                client_id=client_id,
                job_id=job_id,
                invoice_number=format_invoice_number(prefix, number),
                issue_date=issue_date,
                due_date=issue_date + timedelta(days=context.settings.invoice_due_days),
                status=INVOICE_STATUS_ISSUED,
                currency=currency,
                subtotal=revenue,
                tax_amount=Decimal("0"),
                total=revenue,
                items=[
                    {
                        "description": str(description),
                        "quantity": 1,
                        "unit_price": float(revenue),
                        "total": float(revenue),
                    }
                ],
            )
        )

    invoice = execution.run_step("create_invoice", _create_invoice)
    execution.record("invoice", invoice.id)
    logger.info("Issued invoice %s for job %s", invoice.invoice_number, job_id)
    execution.set_progress(final_progress)


def payment_to_receipt(
    execution: WorkflowExecution,
    context: WorkflowContext,
    payment_id: int,
    data: Mapping[str, Any],
) -> None:
    """Received payment: mark it paid. Receipt documents are rendered elsewhere."""

    repository = PaymentRepository(execution.session)
    _require(repository.get_for_owner(payment_id, context.user_id), "Payment", payment_id)
    execution.set_progress(50)
    execution.run_step(
        "mark_payment_paid",
        lambda: repository.update_status(
            payment_id, PAYMENT_STATUS_PAID, owner_id=context.user_id
        ),
    )
    execution.set_progress(100)


def lead_to_quote(
    execution: WorkflowExecution,
    context: WorkflowContext,
    lead_id: int,
    data: Mapping[str, Any],
) -> None:
    """Contacted lead: open a draft quote for the lead's client."""

    session = execution.session
    lead = _require(
        LeadRepository(session).get_for_owner(lead_id, context.user_id), "Lead", lead_id
    )
    execution.set_progress(30)

    client_id = _optional_int(data.get("client_id", lead.client_id))
    business = BusinessSettingsRepository(session).get_for_user(context.user_id)
    currency = (
        data.get("currency")
        or (business.currency if business else None)
        or context.settings.default_currency
    )

    quote = execution.run_step(
        "create_quote",
        lambda: QuoteRepository(session).create(
            Quote(
                id=None,
                client_id=client_id,
                created_by=context.user_id,
                status=QUOTE_STATUS_DRAFT,
                currency=currency,
                lead_id=lead_id,
                items=[
                    {
                        "description": DEFAULT_SERVICE_DESCRIPTION,
                        "quantity": 1,
                        "unit_price": 0,
                        "total": 0,
                    }
                ],
            )
        ),
    )
    execution.record("quote", quote.id)
    execution.set_progress(100)


def job_complete_flow(
    execution: WorkflowExecution,
    context: WorkflowContext,
    job_id: int,
    data: Mapping[str, Any],
) -> None:
    """Close a job, invoice it and notify the owner.

    The status change is not compensated when invoicing fails: the job stays
    completed and the error is reported to the caller.
    """

    session = execution.session
    repository = JobRepository(session)
    _require(repository.get_for_owner(job_id, context.user_id), "Job", job_id)
    job = execution.run_step(
        "complete_job",
        lambda: repository.update_status(job_id, JOB_STATUS_COMPLETED, owner_id=context.user_id),
    )
    execution.set_progress(20)

    job_to_invoice(execution, context, job_id, data, final_progress=80)

    execution.run_optional_step(
        "notify_job_completed",
        lambda: notify_job_completed(
            session,
            recipient_id=context.user_id,
            job_id=job_id,
            job_title=data.get("title") or job.title,
            created_at=context.clock(),
        ),
    )
    execution.set_progress(100)


TemplateHandler = Callable[[WorkflowExecution, WorkflowContext, int, Mapping[str, Any]], None]

WORKFLOW_HANDLERS: dict[str, TemplateHandler] = {
    WORKFLOW_QUOTE_TO_JOB: quote_to_job,
    WORKFLOW_JOB_TO_INVOICE: job_to_invoice,
    WORKFLOW_PAYMENT_TO_RECEIPT: payment_to_receipt,
    WORKFLOW_LEAD_TO_QUOTE: lead_to_quote,
    WORKFLOW_JOB_COMPLETE_FLOW: job_complete_flow,
}


__all__ = [
    "TemplateHandler",
    "WORKFLOW_HANDLERS",
    "WorkflowContext",
    "job_complete_flow",
    "job_to_invoice",
    "lead_to_quote",
    "payment_to_receipt",
    "quote_to_job",
]
