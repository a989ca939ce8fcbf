"""Secondary-channel delivery helpers for the infrastructure layer."""

from .delivery import EmailSender, NotificationDeliveryAdapter, deliver_notification

__all__ = ["EmailSender", "NotificationDeliveryAdapter", "deliver_notification"]
