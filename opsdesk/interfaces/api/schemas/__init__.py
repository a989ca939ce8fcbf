from .automation import AutomationRunRead
from .notification import (
    NotificationMarkReadRequest,
    NotificationRead,
    NotificationsUpdatedRead,
    UnreadCountRead,
)
from .workflow import CreatedEntityRead, WorkflowExecuteRequest, WorkflowExecutionRead

__all__ = [
    "AutomationRunRead",
    "CreatedEntityRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "NotificationsUpdatedRead",
    "UnreadCountRead",
    "WorkflowExecuteRequest",
    "WorkflowExecutionRead",
]
