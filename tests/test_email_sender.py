"""
Tests for EmailService: the send primitive, template rendering and failure reporting.
"""
import base64
from uuid import uuid4

import pytest

from app.core.dto.email import (
    AdminNotificationEmailData,
    EmailAttachment,
    EmailRecipient,
    SendEmailOptions,
    ThankYouEmailData,
)
from app.infrastructure.email import sender
from app.infrastructure.email.sender import EmailService, render_admin_notification
from app.utils.enums import FormType


@pytest.fixture
def sent_messages(monkeypatch):
    messages = []

    async def fake_send(message, **kwargs):
        messages.append((message, kwargs))
        return {}, "OK"

    monkeypatch.setattr(sender.aiosmtplib, "send", fake_send)
    return messages


@pytest.fixture
def service():
    return EmailService(
        host="smtp-relay.brevo.com",
        port=587,
        username="user",
        password="secret",
        admin_email="admin@example.com",
    )


def _admin_data(**overrides) -> AdminNotificationEmailData:
    values = {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john@x.com",
        "interests": ["Web Development"],
        "budget": "$10k-$50k",
        "message": "<b>hello</b>",
        "newsletter_subscribed": True,
        "submission_id": uuid4(),
        "attachments": ["uploads/attachments-abc.pdf"],
    }
    values.update(overrides)
    return AdminNotificationEmailData(**values)


async def test_send_returns_failure_when_transport_not_configured(sent_messages):
    service = EmailService(host="smtp-relay.brevo.com", port=587, username=None, password=None)

    result = await service.send(
        SendEmailOptions(to=EmailRecipient(email="a@x.com"), subject="Hi", html_content="<p>Hi</p>")
    )

    assert result.success is False
    assert result.error == "Email service unavailable"
    assert sent_messages == []


async def test_send_builds_message_and_uses_starttls(service, sent_messages):
    result = await service.send(
        SendEmailOptions(
            to=[EmailRecipient(email="a@x.com", name="Ann"), EmailRecipient(email="b@x.com")],
            subject="Hello",
            html_content="<p>Hello</p>",
            text_content="Hello",
            attachments=[
                EmailAttachment(
                    name="brief.txt",
                    content=base64.b64encode(b"brief").decode(),
                    content_type="text/plain",
                )
            ],
        )
    )

    assert result.success is True
    message, kwargs = sent_messages[0]
    assert result.message_id == message["Message-ID"]
    assert message["To"] == "Ann <a@x.com>, b@x.com"
    assert message["From"] == "Nextsense Team <noreply@nextsensesolution.com>"
    assert kwargs["start_tls"] is True
    assert kwargs["use_tls"] is False
    attachments = list(message.iter_attachments())
    assert attachments[0].get_filename() == "brief.txt"
    assert attachments[0].get_payload(decode=True) == b"brief"


async def test_send_reports_transport_errors(service, monkeypatch):
    async def failing_send(message, **kwargs):
        raise ConnectionRefusedError("smtp down")

    monkeypatch.setattr(sender.aiosmtplib, "send", failing_send)

    result = await service.send(
        SendEmailOptions(to=EmailRecipient(email="a@x.com"), subject="Hi", html_content="<p>Hi</p>")
    )

    assert result.success is False
    assert result.error == "smtp down"


@pytest.mark.parametrize(
    "form_type, sender_address",
    [
        (FormType.NEXTSENSE, "noreply@nextsensesolution.com"),
        (FormType.BLOCKYFY, "noreply@blockyfy.com"),
    ],
)
async def test_thank_you_email_uses_form_sender(service, sent_messages, form_type, sender_address):
    result = await service.send_thank_you_email(
        ThankYouEmailData(
            recipient_email="john@x.com",
            first_name="John",
            last_name="Doe",
            interests=["AI"],
            form_type=form_type,
        )
    )

    message, _ = sent_messages[0]
    assert result.success is True
    assert sender_address in message["From"]
    assert message["Subject"] == "Thank you, John! We've received your submission"
    assert message["To"] == "John Doe <john@x.com>"


async def test_admin_notification_goes_to_admin(service, sent_messages):
    result = await service.send_admin_notification(_admin_data())

    message, _ = sent_messages[0]
    assert result.success is True
    assert message["To"] == "admin@example.com"
    assert message["Subject"] == "New Form Submission from John Doe"
    assert "john@x.com" in message["Reply-To"]


async def test_admin_notification_without_admin_email(sent_messages):
    service = EmailService(host="smtp", port=587, username="u", password="p", admin_email=None)

    result = await service.send_admin_notification(_admin_data())

    assert result.success is False
    assert result.error == "Admin email not configured"
    assert sent_messages == []


def test_admin_template_escapes_user_input_and_lists_attachments():
    data = _admin_data()
    rendered = render_admin_notification(data)

    assert "&lt;b&gt;hello&lt;/b&gt;" in rendered
    assert "<b>hello</b>" not in rendered
    assert "uploads/attachments-abc.pdf" in rendered
    assert str(data.submission_id) in rendered
    assert "Yes" in rendered


def test_admin_template_omits_empty_sections():
    rendered = render_admin_notification(
        _admin_data(message=None, attachments=[], interests=[], phone_number="+1555", heard_from="Google")
    )

    assert "Message</h3>" not in rendered
    assert "Attachments</h3>" not in rendered
    assert "Interests" not in rendered
    assert "+1555" in rendered
    assert "Google" in rendered
