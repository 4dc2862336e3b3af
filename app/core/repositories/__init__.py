from app.core.repositories.base import SqlAlchemyRepository
from app.core.repositories.form_submission_repository import FormSubmissionRepository
from app.core.repositories.nextsense_form_repository import NextsenseFormRepository
from app.core.repositories.blockyfy_form_repository import BlockyfyFormRepository


__all__ = [
    "SqlAlchemyRepository",
    "FormSubmissionRepository",
    "NextsenseFormRepository",
    "BlockyfyFormRepository",
]
