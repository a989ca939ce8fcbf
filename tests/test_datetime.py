"""Tests for the business-timezone clock helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from opsdesk.config import reset_settings_cache
from opsdesk.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    get_app_timezone,
    whole_days_between,
)


@pytest.fixture()
def app_timezone(monkeypatch: pytest.MonkeyPatch):
    """Let a test pick ``APP_TIMEZONE``; the cached zone is rebuilt afterwards."""

    def _set(name: str):
        monkeypatch.setenv("APP_TIMEZONE", name)
        reset_settings_cache()
        get_app_timezone.cache_clear()
        return get_app_timezone()

    yield _set
    monkeypatch.undo()
    reset_settings_cache()
    get_app_timezone.cache_clear()


def test_unknown_timezone_falls_back_to_luanda(app_timezone) -> None:
    assert str(app_timezone("Mars/Olympus_Mons")) == "Africa/Luanda"


def test_configured_timezone_is_used(app_timezone) -> None:
    assert str(app_timezone("Europe/Lisbon")) == "Europe/Lisbon"


def test_storage_round_trip_keeps_wall_clock() -> None:
    utc_value = datetime(2026, 3, 2, 8, 0, tzinfo=timezone.utc)

    stored = ensure_app_naive_datetime(utc_value)

    assert stored == datetime(2026, 3, 2, 9, 0)
    assert ensure_app_timezone(stored) == utc_value
    assert ensure_app_timezone(None) is None


def test_whole_days_between_truncates() -> None:
    start = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

    assert whole_days_between(start, start + timedelta(days=2, hours=23)) == 2
    assert whole_days_between(start, start - timedelta(hours=30)) == -1
