"""Domain entities exposed by the application."""

from .business_settings import BusinessSettings, format_invoice_number
from .client import Client
from .contract import CONTRACT_STATUS_DRAFT, CONTRACT_STATUS_SIGNED, Contract
from .invoice import (
    INVOICE_STATUS_DRAFT,
    INVOICE_STATUS_ISSUED,
    INVOICE_STATUS_OVERDUE,
    Invoice,
)
from .job import (
    JOB_STATUS_CANCELLED,
    JOB_STATUS_COMPLETED,
    JOB_STATUS_CONFIRMED,
    JOB_STATUS_SCHEDULED,
    Job,
)
from .lead import (
    LEAD_STATUS_CONTACTED,
    LEAD_STATUS_LOST,
    LEAD_STATUS_NEW,
    LEAD_STATUS_QUALIFIED,
    LEAD_STATUS_WON,
    LEAD_TERMINAL_STATUSES,
    Lead,
)
from .notification import (
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_REFERENCE_KEYS,
    NOTIFICATION_TYPES,
    NOTIFICATION_TYPE_CONTRACT_SIGNED,
    NOTIFICATION_TYPE_JOB_COMPLETED,
    NOTIFICATION_TYPE_JOB_REMINDER,
    NOTIFICATION_TYPE_LEAD_FOLLOW_UP,
    NOTIFICATION_TYPE_MAINTENANCE_REMINDER,
    NOTIFICATION_TYPE_NEW_LEAD,
    NOTIFICATION_TYPE_PAYMENT_OVERDUE,
    NOTIFICATION_TYPE_PAYMENT_REMINDER,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PRIORITY_URGENT,
    Notification,
    reference_key_for,
)
from .notification_settings import NotificationSettings
from .payment import (
    PAYMENT_STATUS_CANCELLED,
    PAYMENT_STATUS_PAID,
    PAYMENT_STATUS_PENDING,
    Payment,
)
from .quote import QUOTE_STATUS_ACCEPTED, QUOTE_STATUS_DRAFT, QUOTE_STATUS_SENT, Quote
from .resource import Resource
from .user import User
from .workflow import (
    EXECUTION_STATE_FAILED,
    EXECUTION_STATE_PENDING,
    EXECUTION_STATE_RUNNING,
    EXECUTION_STATE_SUCCEEDED,
    WORKFLOW_JOB_COMPLETE_FLOW,
    WORKFLOW_JOB_TO_INVOICE,
    WORKFLOW_LEAD_TO_QUOTE,
    WORKFLOW_PAYMENT_TO_RECEIPT,
    WORKFLOW_QUOTE_TO_JOB,
    WORKFLOW_TEMPLATES,
    CreatedEntity,
    WorkflowExecutionResult,
)

__all__ = [
    "EXECUTION_STATE_FAILED",
    "EXECUTION_STATE_PENDING",
    "EXECUTION_STATE_RUNNING",
    "EXECUTION_STATE_SUCCEEDED",
    "BusinessSettings",
    "Client",
    "Contract",
    "CONTRACT_STATUS_DRAFT",
    "CONTRACT_STATUS_SIGNED",
    "CreatedEntity",
    "format_invoice_number",
    "Invoice",
    "INVOICE_STATUS_DRAFT",
    "INVOICE_STATUS_ISSUED",
    "INVOICE_STATUS_OVERDUE",
    "Job",
    "JOB_STATUS_CANCELLED",
    "JOB_STATUS_COMPLETED",
    "JOB_STATUS_CONFIRMED",
    "JOB_STATUS_SCHEDULED",
    "Lead",
    "LEAD_STATUS_CONTACTED",
    "LEAD_STATUS_LOST",
    "LEAD_STATUS_NEW",
    "LEAD_STATUS_QUALIFIED",
    "LEAD_STATUS_WON",
    "LEAD_TERMINAL_STATUSES",
    "Notification",
    "NotificationSettings",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_REFERENCE_KEYS",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_CONTRACT_SIGNED",
    "NOTIFICATION_TYPE_JOB_COMPLETED",
    "NOTIFICATION_TYPE_JOB_REMINDER",
    "NOTIFICATION_TYPE_LEAD_FOLLOW_UP",
    "NOTIFICATION_TYPE_MAINTENANCE_REMINDER",
    "NOTIFICATION_TYPE_NEW_LEAD",
    "NOTIFICATION_TYPE_PAYMENT_OVERDUE",
    "NOTIFICATION_TYPE_PAYMENT_REMINDER",
    "Payment",
    "PAYMENT_STATUS_CANCELLED",
    "PAYMENT_STATUS_PAID",
    "PAYMENT_STATUS_PENDING",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "PRIORITY_URGENT",
    "Quote",
    "QUOTE_STATUS_ACCEPTED",
    "QUOTE_STATUS_DRAFT",
    "QUOTE_STATUS_SENT",
    "reference_key_for",
    "Resource",
    "User",
    "WORKFLOW_JOB_COMPLETE_FLOW",
    "WORKFLOW_JOB_TO_INVOICE",
    "WORKFLOW_LEAD_TO_QUOTE",
    "WORKFLOW_PAYMENT_TO_RECEIPT",
    "WORKFLOW_QUOTE_TO_JOB",
    "WORKFLOW_TEMPLATES",
    "WorkflowExecutionResult",
]
