"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types

import pytest

from opsdesk.infrastructure import email as email_module
from opsdesk.infrastructure.notifications import NotificationDeliveryAdapter
from opsdesk.domain.entities import Notification


class _DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@example.com"


class _RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that keeps the messages it sends."""

    sent: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        self.sent.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


@pytest.fixture()
def configured(monkeypatch: pytest.MonkeyPatch):
    _RecordingClient.sent = []
    monkeypatch.setattr(email_module, "get_settings", lambda: _DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", _RecordingClient)
    return _RecordingClient


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class EmptySettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: EmptySettings())

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False


def test_send_email_success(configured) -> None:
    """A successful SendGrid response should return ``True``."""

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is True
    assert len(configured.sent) == 1


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {
                "errors": [
                    {
                        "message": "The provided authorization grant is invalid.",
                        "help": "https://docs.sendgrid.com/for-developers/sending-email/api-getting-started",
                    }
                ]
            }
        ).encode()

    class FailingClient(_RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: _DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_send_email_unsuccessful_status(monkeypatch: pytest.MonkeyPatch, caplog) -> None:
    class RejectingClient(_RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(status_code=400, body=b'{"errors": [{"message": "bad to"}]}')

    monkeypatch.setattr(email_module, "get_settings", lambda: _DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False

    assert "status 400: bad to" in caplog.text


def test_render_notification_email_escapes_content() -> None:
    subject, html = email_module.render_notification_email(
        "payment_overdue",
        {"title": "Overdue <b>payment</b>", "message": "Client & Co owes 10"},
    )

    assert subject == "Pending payment"
    assert "&lt;b&gt;payment&lt;/b&gt;" in html
    assert "Client &amp; Co owes 10" in html


def test_render_unknown_type_uses_default_subject() -> None:
    subject, _html = email_module.render_notification_email("something_else", {})

    assert subject == "New notification"


def test_send_notification_email(configured) -> None:
    assert email_module.send_notification_email(
        "owner@example.com", "job_reminder", {"title": "Upcoming job", "job_id": 1}
    )
    assert len(configured.sent) == 1


def test_delivery_adapter_skips_opted_out_recipients(session, owner) -> None:
    calls = []
    adapter = NotificationDeliveryAdapter(session, sender=lambda *args: calls.append(args) or True)
    notification = Notification(id=1, recipient_id=owner.id, type="new_lead", payload={"lead_id": 1})

    assert adapter.deliver(notification) is False
    assert calls == []


def test_delivery_adapter_sends_to_opted_in_recipient(session, make_recipient) -> None:
    recipient = make_recipient(email_notifications=True)
    calls = []
    adapter = NotificationDeliveryAdapter(session, sender=lambda *args: calls.append(args) or True)
    notification = Notification(
        id=1, recipient_id=recipient.id, type="new_lead", payload={"lead_id": 5}
    )

    assert adapter.deliver(notification) is True
    assert calls == [("owner@example.com", "new_lead", {"lead_id": 5})]


def test_delivery_adapter_swallows_sender_errors(session, make_recipient, caplog) -> None:
    recipient = make_recipient(email_notifications=True)

    def broken_sender(*_args):
        raise TimeoutError("sendgrid timeout")

    adapter = NotificationDeliveryAdapter(session, sender=broken_sender)
    notification = Notification(id=1, recipient_id=recipient.id, type="new_lead", payload={"lead_id": 5})

    with caplog.at_level("ERROR"):
        assert adapter.deliver(notification) is False

    assert "Failed to deliver notification 1" in caplog.text
