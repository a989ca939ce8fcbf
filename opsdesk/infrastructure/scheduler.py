"""Background runner triggering the notification checks on a fixed interval."""

from __future__ import annotations

import logging
from typing import Callable

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.orm import Session

from opsdesk.application.use_cases.automation import run_notification_checks_for_all
from opsdesk.config import get_settings
from opsdesk.utils import get_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)

JOB_ID = "notification_checks"


class AutomationScheduler:
    """Run the notification checks for every recipient every few hours.

    A single job instance is allowed at a time and missed runs are coalesced,
    so two ticks never evaluate the same records concurrently.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        *,
        interval_hours: float | None = None,
        enabled: bool | None = None,
    ) -> None:
        settings = get_settings()
        self._session_factory = session_factory
        self.interval_hours = (
            interval_hours if interval_hours is not None else settings.automation_interval_hours
        )
        self.enabled = enabled if enabled is not None else settings.automation_enabled
        self._scheduler: BackgroundScheduler | None = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    def start(self) -> None:
        if not self.enabled:
            logger.info("Automation scheduler disabled; not starting")
            return
        if self.running:
            logger.warning("Automation scheduler already running")
            return

        scheduler = BackgroundScheduler(timezone=get_app_timezone())
        scheduler.add_job(
            self.run_once,
            IntervalTrigger(hours=self.interval_hours),
            id=JOB_ID,
            name="Notification checks",
            replace_existing=True,
            max_instances=1,
            coalesce=True,
            next_run_time=now_in_app_timezone(),
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Automation scheduler started (every %s hours)", self.interval_hours)

    def stop(self) -> None:
        if self._scheduler is None:
            return
        if self._scheduler.running:
            self._scheduler.shutdown(wait=True)
        self._scheduler = None
        logger.info("Automation scheduler stopped")

    def run_once(self) -> None:
        """Single tick; errors are logged so the next tick still runs."""

        logger.info("Running scheduled notification checks")
        try:
            results = run_notification_checks_for_all(self._session_factory)
        except Exception:
            logger.exception("Scheduled notification checks failed")
            return
        logger.info(
            "Scheduled notification checks done: recipients=%s created=%s failed=%s",
            len(results),
            sum(result.created for result in results),
            sum(result.failed for result in results),
        )


__all__ = ["AutomationScheduler"]
