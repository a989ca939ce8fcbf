"""Notification emails sent through SendGrid."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from html import escape
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from opsdesk.config import get_settings

logger = logging.getLogger(__name__)


def _sendgrid_error_text(body: Any) -> str:
    """Flatten a SendGrid error body into its ``errors[].message`` values."""

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body.strip() or "no details"
    if not body:
        return "no details"
    errors = body.get("errors") if isinstance(body, dict) else None
    if isinstance(errors, list):
        messages = [
            str(item["message"]) for item in errors if isinstance(item, dict) and item.get("message")
        ]
        if messages:
            return "; ".join(messages)
    return str(body)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send ``html_content`` to ``recipient``; return whether SendGrid accepted it."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:
        status_code = getattr(exc, "status_code", None)
        if status_code is None:
            logger.exception("Error sending email to %s via SendGrid", recipient)
        else:
            logger.error(
                "SendGrid API request failed with status %s: %s",
                status_code,
                _sendgrid_error_text(getattr(exc, "body", None)),
            )
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        logger.error(
            "SendGrid API responded with status %s: %s",
            status_code,
            _sendgrid_error_text(getattr(response, "body", None)),
        )
        return False

    return True


_DEFAULT_TEMPLATE = ("New notification", "You have a new notification in OpsDesk.")

_NOTIFICATION_TEMPLATES: dict[str, tuple[str, str]] = {
    "job_reminder": ("Reminder: upcoming job", "You have a job coming up soon."),
    "lead_follow_up": ("Reminder: lead follow-up", "It is time to follow up with a lead."),
    "payment_overdue": ("Pending payment", "A payment is still pending and needs attention."),
    "payment_reminder": (
        "Reminder: payment due soon",
        "A client payment is due in the next few days.",
    ),
    "maintenance_reminder": (
        "Reminder: resource maintenance",
        "A resource needs maintenance soon.",
    ),
    "new_lead": ("New lead received", "You received a new lead."),
    "job_completed": ("Job completed", "A job was marked as completed."),
    "contract_signed": ("Contract signed", "A contract was signed by your client."),
}


def render_notification_email(
    notification_type: str, payload: Mapping[str, Any]
) -> tuple[str, str]:
    """Return the subject and HTML body used to email a notification."""

    subject, intro = _NOTIFICATION_TEMPLATES.get(notification_type, _DEFAULT_TEMPLATE)
    title = escape(str(payload.get("title") or subject))
    message = payload.get("message")
    parts = [
        "<p>Hello,</p>",
        f"<p>{escape(intro)}</p>",
        f"<h2>{title}</h2>",
    ]
    if message:
        parts.append(f"<p>{escape(str(message))}</p>")
    parts.append("<p>Open OpsDesk for more details.</p>")
    return subject, "".join(parts)


def send_notification_email(
    recipient_email: str, notification_type: str, payload: Mapping[str, Any]
) -> bool:
    """Email a persisted notification to its recipient."""

    subject, html_content = render_notification_email(notification_type, payload)
    return send_email(subject, html_content, recipient_email)


__all__ = ["render_notification_email", "send_email", "send_notification_email"]
