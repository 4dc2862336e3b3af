from sqlalchemy.ext.asyncio import AsyncSession

from app.core.repositories.form_submission_repository import FormSubmissionRepository
from app.infrastructure.database.models.nextsense_form import NextsenseFormSubmission


class NextsenseFormRepository(FormSubmissionRepository[NextsenseFormSubmission]):

    def __init__(self, session: AsyncSession):
        super().__init__(session, NextsenseFormSubmission)
