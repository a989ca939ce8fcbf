"""Domain entity holding the invoicing preferences of a business."""

from dataclasses import dataclass


@dataclass
class BusinessSettings:
    """Per-user invoice numbering configuration."""

    id: int | None
    user_id: int
    business_name: str | None
    invoice_prefix: str | None
    next_invoice_number: int
    currency: str | None


def format_invoice_number(prefix: str, number: int) -> str:
    """Return the printable invoice number, e.g. ``FT0007``."""

    return f"{prefix}{number:04d}"


__all__ = ["BusinessSettings", "format_invoice_number"]
