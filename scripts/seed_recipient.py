"""Utility script to register a recipient with default settings."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from opsdesk.config import get_settings
from opsdesk.domain.entities import BusinessSettings, NotificationSettings, User
from opsdesk.infrastructure.database import SessionLocal, initialize_database
from opsdesk.infrastructure.repositories import (
    BusinessSettingsRepository,
    NotificationSettingsRepository,
    UserRepository,
)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for recipient creation."""

    parser = argparse.ArgumentParser(
        description="Create a recipient with notification and invoicing settings.",
    )
    parser.add_argument("--name", default="Owner", help="Full name (default: Owner)")
    parser.add_argument(
        "--email",
        default="owner@example.com",
        help="Email address (default: owner@example.com)",
    )
    parser.add_argument("--business-name", default=None, help="Business name (optional)")
    parser.add_argument(
        "--invoice-prefix",
        default=None,
        help="Invoice number prefix. Defaults to DEFAULT_INVOICE_PREFIX.",
    )
    parser.add_argument(
        "--email-notifications",
        action="store_true",
        help="Also deliver notifications by email.",
    )
    return parser.parse_args()


def main() -> None:
    """Create the recipient using the provided command line arguments."""

    args = parse_args()
    settings = get_settings()

    initialize_database()

    session = SessionLocal()
    try:
        user = UserRepository(session).create(User(id=None, name=args.name, email=args.email))
        NotificationSettingsRepository(session).create(
            NotificationSettings(
                id=None,
                user_id=user.id,
                email_notifications=args.email_notifications,
            )
        )
        BusinessSettingsRepository(session).create(
            BusinessSettings(
                id=None,
                user_id=user.id,
                business_name=args.business_name,
                invoice_prefix=args.invoice_prefix or settings.default_invoice_prefix,
                next_invoice_number=1,
                currency=settings.default_currency,
            )
        )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the recipient: {exc}") from exc
    else:
        print(
            "Recipient created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
