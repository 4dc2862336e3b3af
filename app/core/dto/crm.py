from pydantic import BaseModel, Field


class CrmContact(BaseModel):
    email: str
    attributes: dict[str, str] = Field(default_factory=dict)
    newsletter_subscribed: bool = False
    # target list, applied only when the contact opted into the newsletter
    list_id: int | None = None
    list_name: str | None = None
