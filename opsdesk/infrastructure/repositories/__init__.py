"""Repository implementations for infrastructure layer."""

from .business_settings_repository import (
    BusinessSettingsRepository,
    InvoiceNumberConflictError,
)
from .client_repository import ClientRepository
from .contract_repository import ContractRepository
from .invoice_repository import InvoiceRepository
from .job_repository import JobRepository
from .lead_repository import LeadRepository
from .notification_repository import NotificationRepository
from .notification_settings_repository import NotificationSettingsRepository
from .payment_repository import PaymentRepository
from .quote_repository import QuoteRepository
from .resource_repository import ResourceRepository
from .user_repository import UserRepository

__all__ = [
    "BusinessSettingsRepository",
    "ClientRepository",
    "ContractRepository",
    "InvoiceNumberConflictError",
    "InvoiceRepository",
    "JobRepository",
    "LeadRepository",
    "NotificationRepository",
    "NotificationSettingsRepository",
    "PaymentRepository",
    "QuoteRepository",
    "ResourceRepository",
    "UserRepository",
]
