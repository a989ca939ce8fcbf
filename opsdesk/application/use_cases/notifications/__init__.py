"""Public helpers for emitting and reading notifications."""

from .events import notify_job_completed, persist_notification
from .inbox import (
    count_unread_notifications,
    list_notifications,
    list_unread_notifications,
    mark_all_notifications_read,
    mark_notifications_read,
)

__all__ = [
    "count_unread_notifications",
    "list_notifications",
    "list_unread_notifications",
    "mark_all_notifications_read",
    "mark_notifications_read",
    "notify_job_completed",
    "persist_notification",
]
