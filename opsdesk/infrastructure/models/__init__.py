"""ORM models used by the application infrastructure."""

from .business_settings import BusinessSettingsModel
from .client import ClientModel
from .contract import ContractModel
from .invoice import InvoiceModel
from .job import JobModel
from .lead import LeadModel
from .notification import NotificationModel
from .notification_settings import NotificationSettingsModel
from .payment import PaymentModel
from .quote import QuoteModel
from .resource import ResourceModel
from .user import UserModel

__all__ = [
    "BusinessSettingsModel",
    "ClientModel",
    "ContractModel",
    "InvoiceModel",
    "JobModel",
    "LeadModel",
    "NotificationModel",
    "NotificationSettingsModel",
    "PaymentModel",
    "QuoteModel",
    "ResourceModel",
    "UserModel",
]
