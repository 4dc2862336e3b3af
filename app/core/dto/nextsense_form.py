from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.validators.types import CommaSeparatedList, FormBool, NonEmptyStr, OptionalText


class NextsenseFormCreateModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    first_name: NonEmptyStr = Field(..., alias="firstName")
    last_name: NonEmptyStr = Field(..., alias="lastName")
    email: EmailStr
    interests: CommaSeparatedList
    budget: NonEmptyStr
    message: OptionalText = None
    newsletter_subscribed: FormBool = Field(False, alias="newsletterSubscribed")
    privacy_policy_accepted: FormBool = Field(..., alias="privacyPolicyAccepted")
    # JSON clients may send it; files only arrive through multipart
    attachments: Any = Field(None, exclude=True)


class NextsenseFormModel(BaseModel):
    id: UUID
    first_name: str
    last_name: str
    email: str
    interests: list[str]
    budget: str
    message: str | None
    newsletter_subscribed: bool
    privacy_policy_accepted: bool
    attachments: list[str]
    synced_to_brevo: bool
    brevo_contact_id: str | None
    created_at: datetime
