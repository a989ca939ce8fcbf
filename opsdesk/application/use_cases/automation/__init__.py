"""Rule-based notification scheduler."""

from .dedup import DeduplicationGate
from .rules import (
    RULES,
    RULES_BY_TYPE,
    AutomationRule,
    NotificationCandidate,
    cooldown_for,
    evaluate,
)
from .run_scheduler import (
    ENTITY_LOADERS,
    SchedulerRunResult,
    run_notification_checks,
    run_notification_checks_for_all,
)

__all__ = [
    "AutomationRule",
    "DeduplicationGate",
    "ENTITY_LOADERS",
    "NotificationCandidate",
    "RULES",
    "RULES_BY_TYPE",
    "SchedulerRunResult",
    "cooldown_for",
    "evaluate",
    "run_notification_checks",
    "run_notification_checks_for_all",
]
