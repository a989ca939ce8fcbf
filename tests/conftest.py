"""Shared fixtures: a throwaway SQLite database and a configured recipient."""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

import pytest

TEST_DB_PATH = Path(__file__).parent / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["APP_TIMEZONE"] = "Africa/Luanda"
os.environ["AUTOMATION_ENABLED"] = "false"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from opsdesk.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from opsdesk.domain.entities import (  # noqa: E402
    BusinessSettings,
    NotificationSettings,
    User,
)
from opsdesk.infrastructure import database  # noqa: E402
from opsdesk.infrastructure.repositories import (  # noqa: E402
    BusinessSettingsRepository,
    NotificationSettingsRepository,
    UserRepository,
)
from opsdesk.utils import get_app_timezone  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _remove_database_file():
    yield
    database.engine.dispose()
    if TEST_DB_PATH.exists():
        TEST_DB_PATH.unlink()


@pytest.fixture(autouse=True)
def setup_database():
    """Prepare a fresh schema for every test."""

    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)
    database.initialize_database()
    yield
    database.Base.metadata.drop_all(bind=database.engine, checkfirst=True)


@pytest.fixture()
def session():
    db = database.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, tzinfo=get_app_timezone())


def create_recipient(
    session,
    *,
    name: str = "Owner",
    email: str | None = "owner@example.com",
    is_active: bool = True,
    **flags: bool,
) -> User:
    """Create a user together with its notification settings."""

    user = UserRepository(session).create(
        User(id=None, name=name, email=email, is_active=is_active)
    )
    NotificationSettingsRepository(session).create(
        NotificationSettings(id=None, user_id=user.id, **flags)
    )
    return user


@pytest.fixture()
def make_recipient(session):
    def _make(**kwargs) -> User:
        return create_recipient(session, **kwargs)

    return _make


@pytest.fixture()
def owner(session) -> User:
    return create_recipient(session)


@pytest.fixture()
def business_settings(session, owner) -> BusinessSettings:
    return BusinessSettingsRepository(session).create(
        BusinessSettings(
            id=None,
            user_id=owner.id,
            business_name="Studio Luz",
            invoice_prefix="FT",
            next_invoice_number=1,
            currency="AOA",
        )
    )
