from app.core.dto.crm import CrmContact
from app.core.dto.email import AdminNotificationEmailData, SendEmailResult, ThankYouEmailData


class FakeCrmClient:

    def __init__(self, contact_id: str | None = "brevo-1", error: Exception | None = None):
        self.contact_id = contact_id
        self.error = error
        self.contacts: list[CrmContact] = []

    async def upsert(self, contact: CrmContact) -> str | None:
        self.contacts.append(contact)
        if self.error is not None:
            raise self.error
        return self.contact_id


class FakeEmailService:

    def __init__(self, success: bool = True, error: Exception | None = None):
        self.success = success
        self.error = error
        self.thank_you: list[ThankYouEmailData] = []
        self.admin: list[AdminNotificationEmailData] = []

    def _result(self) -> SendEmailResult:
        if self.error is not None:
            raise self.error
        if self.success:
            return SendEmailResult(success=True, message_id="<fake@example.com>")
        return SendEmailResult(success=False, error="smtp down")

    async def send_thank_you_email(self, data: ThankYouEmailData) -> SendEmailResult:
        self.thank_you.append(data)
        return self._result()

    async def send_admin_notification(self, data: AdminNotificationEmailData) -> SendEmailResult:
        self.admin.append(data)
        return self._result()
