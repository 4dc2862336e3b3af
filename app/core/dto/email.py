from uuid import UUID

from pydantic import BaseModel, Field

from app.utils.enums import FormType


class EmailRecipient(BaseModel):
    email: str
    name: str | None = None


class EmailSender(BaseModel):
    email: str
    name: str


class EmailAttachment(BaseModel):
    name: str
    content: str  # base64
    content_type: str | None = None


class SendEmailOptions(BaseModel):
    to: EmailRecipient | list[EmailRecipient]
    subject: str
    html_content: str
    text_content: str | None = None
    sender: EmailSender | None = None
    reply_to: EmailRecipient | None = None
    attachments: list[EmailAttachment] = Field(default_factory=list)

    @property
    def recipients(self) -> list[EmailRecipient]:
        return self.to if isinstance(self.to, list) else [self.to]


class SendEmailResult(BaseModel):
    success: bool
    message_id: str | None = None
    error: str | None = None


class ThankYouEmailData(BaseModel):
    recipient_email: str
    first_name: str
    last_name: str = ""
    interests: list[str] = Field(default_factory=list)
    form_type: FormType


class AdminNotificationEmailData(BaseModel):
    first_name: str
    last_name: str = ""
    email: str
    interests: list[str] = Field(default_factory=list)
    budget: str
    message: str | None = None
    newsletter_subscribed: bool
    submission_id: UUID
    attachments: list[str] = Field(default_factory=list)
    phone_number: str | None = None
    heard_from: str | None = None
