"""Query-before-write gate that suppresses repeated notifications."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

from opsdesk.infrastructure.repositories import NotificationRepository
from opsdesk.utils import ensure_app_timezone

from .rules import cooldown_for


class DeduplicationGate:
    """Decide whether a candidate may be stored.

    The check and the following insert are not atomic. Two overlapping runs
    can both pass the gate for the same entity; the cooldown window bounds how
    often that can happen.
    """

    def __init__(
        self,
        repository: NotificationRepository,
        *,
        cooldowns: Callable[[str], timedelta] = cooldown_for,
    ) -> None:
        self._repository = repository
        self._cooldowns = cooldowns

    def should_create(
        self,
        notification_type: str,
        recipient_id: int,
        reference_key: str,
        reference_value: object,
        now: datetime,
    ) -> bool:
        latest = self._repository.get_latest_by_reference(
            recipient_id=recipient_id,
            notification_type=notification_type,
            reference_key=reference_key,
            reference_id=reference_value,
        )
        if latest is None or latest.created_at is None:
            return True

        window_start = ensure_app_timezone(now) - self._cooldowns(notification_type)
        return latest.created_at < window_start


__all__ = ["DeduplicationGate"]
