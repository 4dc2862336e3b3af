from datetime import datetime, timezone
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from pathlib import Path
import base64
import html

import aiosmtplib

from app.core.dto.email import (
    AdminNotificationEmailData,
    EmailRecipient,
    EmailSender,
    SendEmailOptions,
    SendEmailResult,
    ThankYouEmailData,
)
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.logging import get_logger
from app.utils.enums import FormType


logger = get_logger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
ADMIN_TEMPLATE_PATH = TEMPLATES_DIR / "new_form_submission.html"
THANK_YOU_TEMPLATE_PATHS = {
    FormType.NEXTSENSE: TEMPLATES_DIR / "thank_you_nextsense.html",
    FormType.BLOCKYFY: TEMPLATES_DIR / "thank_you_blockyfy.html",
}

DEFAULT_SENDERS = {
    FormType.NEXTSENSE: EmailSender(name="Nextsense Team", email="noreply@nextsensesolution.com"),
    FormType.BLOCKYFY: EmailSender(name="Blockyfy Software Solutions", email="noreply@blockyfy.com"),
}
SYSTEM_SENDER = EmailSender(name="Form Handler System", email="noreply@formhandler.com")

SECTION_STYLE = "background-color: #f4f4f4; padding: 15px; border-radius: 5px; margin: 20px 0;"


def _format_address(recipient: EmailRecipient | EmailSender) -> str:
    return formataddr((recipient.name or "", recipient.email))


def _render_detail_row(label: str, value: str) -> str:
    return f"<p><strong>{label}:</strong> {html.escape(value)}</p>"


def _render_section(title: str, body: str) -> str:
    return (
        f'<div style="{SECTION_STYLE}">'
        f'<h3 style="margin-top: 0;">{title}</h3>'
        f"{body}"
        "</div>"
    )


def render_admin_notification(data: AdminNotificationEmailData) -> str:
    rows = []
    if data.interests:
        rows.append(_render_detail_row("Interests", ", ".join(data.interests)))
    rows.append(_render_detail_row("Budget", data.budget))
    if data.phone_number:
        rows.append(_render_detail_row("Phone", data.phone_number))
    if data.heard_from:
        rows.append(_render_detail_row("Source", data.heard_from))

    message_section = ""
    if data.message:
        message_section = _render_section(
            "Message",
            f'<p style="white-space: pre-wrap;">{html.escape(data.message)}</p>',
        )

    attachments_section = ""
    if data.attachments:
        items = "".join(f"<li>{html.escape(path)}</li>" for path in data.attachments)
        attachments_section = _render_section("Attachments", f"<ul>{items}</ul>")

    template = ADMIN_TEMPLATE_PATH.read_text(encoding="utf-8")
    return template.format(
        name=html.escape(f"{data.first_name} {data.last_name}".strip()),
        email=html.escape(data.email),
        details_rows="\n      ".join(rows),
        newsletter="Yes" if data.newsletter_subscribed else "No",
        message_section=message_section,
        attachments_section=attachments_section,
        submission_id=data.submission_id,
        timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC"),
    )


def render_thank_you(data: ThankYouEmailData) -> str:
    interests_section = ""
    if data.interests:
        items = "".join(f"<li>{html.escape(interest)}</li>" for interest in data.interests)
        interests_section = (
            '<p style="margin: 0 0 8px 0;">You told us you are interested in:</p>'
            f'<ul style="margin: 0 0 16px 0;">{items}</ul>'
        )

    template = THANK_YOU_TEMPLATE_PATHS[data.form_type].read_text(encoding="utf-8")
    return template.format(
        first_name=html.escape(data.first_name),
        interests_section=interests_section,
    )


class EmailService:
    """Transactional email over the provider's SMTP relay.

    Every send returns a SendEmailResult; transport errors are logged and
    reported in the result instead of being raised.
    """

    def __init__(
        self,
        host: str | None,
        port: int,
        username: str | None,
        password: str | None,
        use_tls: bool = True,
        admin_email: str | None = None,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.admin_email = admin_email

        if not self.is_available():
            logger.warning("email_service_disabled", reason="smtp_not_configured")

    @classmethod
    def from_config(cls) -> "EmailService":
        return cls(
            host=APP_CONFIG.SMTP_HOST,
            port=APP_CONFIG.SMTP_PORT,
            username=APP_CONFIG.SMTP_USER,
            password=APP_CONFIG.SMTP_PASS,
            use_tls=APP_CONFIG.SMTP_USE_TLS,
            admin_email=APP_CONFIG.ADMIN_EMAIL,
        )

    def is_available(self) -> bool:
        return bool(self.host and self.port and self.username and self.password)

    def _build_message(self, options: SendEmailOptions) -> EmailMessage:
        sender = options.sender or DEFAULT_SENDERS[FormType.NEXTSENSE]

        message = EmailMessage()
        message["From"] = _format_address(sender)
        message["To"] = ", ".join(_format_address(r) for r in options.recipients)
        message["Subject"] = options.subject
        message["Message-ID"] = make_msgid(domain=sender.email.rsplit("@", 1)[-1])
        if options.reply_to:
            message["Reply-To"] = _format_address(options.reply_to)

        if options.text_content:
            message.set_content(options.text_content)
            message.add_alternative(options.html_content, subtype="html")
        else:
            message.set_content(options.html_content, subtype="html")

        for attachment in options.attachments:
            maintype, _, subtype = (attachment.content_type or "application/octet-stream").partition("/")
            message.add_attachment(
                base64.b64decode(attachment.content),
                maintype=maintype,
                subtype=subtype or "octet-stream",
                filename=attachment.name,
            )
        return message

    async def send(self, options: SendEmailOptions) -> SendEmailResult:
        recipients = ", ".join(r.email for r in options.recipients)
        if not self.is_available():
            logger.warning("email_skipped", reason="smtp_not_configured", recipients=recipients)
            return SendEmailResult(success=False, error="Email service unavailable")

        try:
            message = self._build_message(options)

            use_tls_direct = bool(self.use_tls) and self.port == 465
            start_tls = bool(self.use_tls) and not use_tls_direct

            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                use_tls=use_tls_direct,
                start_tls=start_tls,
            )
        except Exception as exc:
            logger.error(
                "email_send_failed",
                recipients=recipients,
                error=str(exc),
                error_type=type(exc).__name__,
            )
            return SendEmailResult(success=False, error=str(exc) or type(exc).__name__)

        logger.info("email_sent", recipients=recipients, subject=options.subject)
        return SendEmailResult(success=True, message_id=message["Message-ID"])

    async def send_thank_you_email(self, data: ThankYouEmailData) -> SendEmailResult:
        full_name = f"{data.first_name} {data.last_name}".strip()
        return await self.send(
            SendEmailOptions(
                to=EmailRecipient(email=data.recipient_email, name=full_name),
                subject=f"Thank you, {data.first_name}! We've received your submission",
                html_content=render_thank_you(data),
                sender=DEFAULT_SENDERS[data.form_type],
            )
        )

    async def send_admin_notification(self, data: AdminNotificationEmailData) -> SendEmailResult:
        if not self.admin_email:
            logger.warning("admin_notification_skipped", reason="admin_email_not_configured")
            return SendEmailResult(success=False, error="Admin email not configured")

        return await self.send(
            SendEmailOptions(
                to=EmailRecipient(email=self.admin_email),
                subject=f"New Form Submission from {data.first_name} {data.last_name}".strip(),
                html_content=render_admin_notification(data),
                sender=SYSTEM_SENDER,
                reply_to=EmailRecipient(email=data.email, name=f"{data.first_name} {data.last_name}".strip()),
            )
        )
