from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.validators.types import FormBool, NonEmptyStr, OptionalText


class BlockyfyFormCreateModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: NonEmptyStr
    email: EmailStr
    phone_number: NonEmptyStr
    budget: NonEmptyStr
    source: NonEmptyStr
    message: OptionalText = None
    newsletter_subscribed: FormBool = Field(False, alias="newsletterSubscribed")


class BlockyfyFormModel(BaseModel):
    id: UUID
    name: str
    email: str
    phone_number: str
    budget: str
    source: str
    message: str | None
    newsletter_subscribed: bool
    attachments: list[str]
    synced_to_brevo: bool
    brevo_contact_id: str | None
    created_at: datetime

    def split_name(self) -> tuple[str, str]:
        parts = self.name.split(" ")
        first_name = parts[0] or self.name
        last_name = " ".join(parts[1:])
        return first_name, last_name
