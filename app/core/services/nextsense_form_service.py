from app.core.dto.crm import CrmContact
from app.core.dto.email import AdminNotificationEmailData, ThankYouEmailData
from app.core.dto.nextsense_form import NextsenseFormModel
from app.core.repositories.nextsense_form_repository import NextsenseFormRepository
from app.core.services.form_submission_service import FormSubmissionService
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.database.models.nextsense_form import NextsenseFormSubmission
from app.utils.enums import FormType


class NextsenseFormService(FormSubmissionService[NextsenseFormModel]):

    form_type = FormType.NEXTSENSE
    model_class = NextsenseFormSubmission
    dto_class = NextsenseFormModel
    repository_class = NextsenseFormRepository

    def build_crm_contact(self, submission: NextsenseFormModel) -> CrmContact:
        return CrmContact(
            email=submission.email,
            attributes={
                "FIRSTNAME": submission.first_name,
                "LASTNAME": submission.last_name,
                "MESSAGE": submission.message or "",
            },
            newsletter_subscribed=submission.newsletter_subscribed,
            list_id=APP_CONFIG.ZAWAYA_CONTACT_ID,
            list_name=APP_CONFIG.ZAWAYA_CONTACT_LIST,
        )

    def build_thank_you_data(self, submission: NextsenseFormModel) -> ThankYouEmailData:
        return ThankYouEmailData(
            recipient_email=submission.email,
            first_name=submission.first_name,
            last_name=submission.last_name,
            interests=submission.interests,
            form_type=self.form_type,
        )

    def build_admin_notification_data(self, submission: NextsenseFormModel) -> AdminNotificationEmailData:
        return AdminNotificationEmailData(
            first_name=submission.first_name,
            last_name=submission.last_name,
            email=submission.email,
            interests=submission.interests,
            budget=submission.budget,
            message=submission.message,
            newsletter_subscribed=submission.newsletter_subscribed,
            submission_id=submission.id,
            attachments=submission.attachments,
        )
