from sqlalchemy import JSON, Text
from sqlalchemy.orm import Mapped, mapped_column


class FormSubmissionMixin:
    """Columns shared by every form: message, attachments and CRM sync status."""

    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    attachments: Mapped[list[str]] = mapped_column(JSON, default=list)
    newsletter_subscribed: Mapped[bool] = mapped_column(default=False)

    synced_to_brevo: Mapped[bool] = mapped_column(default=False)
    brevo_contact_id: Mapped[str | None] = mapped_column(nullable=True)
