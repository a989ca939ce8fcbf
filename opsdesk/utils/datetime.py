"""Clock helpers bound to the configured business timezone.

Domain code works with aware datetimes; the database columns hold the same
wall-clock value without an offset.
"""

from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from opsdesk.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "Africa/Luanda"


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the ``APP_TIMEZONE`` zone, or Africa/Luanda when it is unknown."""

    name = (get_settings().app_timezone or "").strip() or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; using %s", name, DEFAULT_TIMEZONE)
        return ZoneInfo(DEFAULT_TIMEZONE)


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default: the current business wall-clock time without ``tzinfo``."""

    return datetime.now(tz=get_app_timezone()).replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the app timezone; naive values are taken as local."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    """Storage form of ``value``: converted to the app timezone, offset dropped."""

    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def whole_days_between(earlier: datetime, later: datetime) -> int:
    """Complete days from ``earlier`` to ``later``, truncated toward zero."""

    return int((later - earlier).total_seconds() / 86400)
