from app.core.services.form_submission_service import FormSubmissionService
from app.core.services.nextsense_form_service import NextsenseFormService
from app.core.services.blockyfy_form_service import BlockyfyFormService


__all__ = [
    "FormSubmissionService",
    "NextsenseFormService",
    "BlockyfyFormService",
]
