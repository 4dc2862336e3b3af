from app.core.dto.blockyfy_form import BlockyfyFormModel
from app.core.dto.crm import CrmContact
from app.core.dto.email import AdminNotificationEmailData, ThankYouEmailData
from app.core.repositories.blockyfy_form_repository import BlockyfyFormRepository
from app.core.services.form_submission_service import FormSubmissionService
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.database.models.blockyfy_form import BlockyfyFormSubmission
from app.utils.enums import FormType


class BlockyfyFormService(FormSubmissionService[BlockyfyFormModel]):

    form_type = FormType.BLOCKYFY
    model_class = BlockyfyFormSubmission
    dto_class = BlockyfyFormModel
    repository_class = BlockyfyFormRepository

    def build_crm_contact(self, submission: BlockyfyFormModel) -> CrmContact:
        return CrmContact(
            email=submission.email,
            attributes={
                "NAME": submission.name,
                "BUDGET": submission.budget,
                "SOURCE": submission.source,
                "MESSAGE": submission.message or "",
            },
            newsletter_subscribed=submission.newsletter_subscribed,
            list_id=APP_CONFIG.BREVO_LIST_ID,
        )

    def build_thank_you_data(self, submission: BlockyfyFormModel) -> ThankYouEmailData:
        first_name, last_name = submission.split_name()
        return ThankYouEmailData(
            recipient_email=submission.email,
            first_name=first_name,
            last_name=last_name,
            form_type=self.form_type,
        )

    def build_admin_notification_data(self, submission: BlockyfyFormModel) -> AdminNotificationEmailData:
        first_name, last_name = submission.split_name()
        return AdminNotificationEmailData(
            first_name=first_name,
            last_name=last_name,
            email=submission.email,
            budget=submission.budget,
            message=submission.message,
            newsletter_subscribed=submission.newsletter_subscribed,
            submission_id=submission.id,
            attachments=submission.attachments,
            phone_number=submission.phone_number,
            heard_from=submission.source,
        )
