from sqlalchemy.ext.asyncio import AsyncSession

from app.core.repositories.form_submission_repository import FormSubmissionRepository
from app.infrastructure.database.models.blockyfy_form import BlockyfyFormSubmission


class BlockyfyFormRepository(FormSubmissionRepository[BlockyfyFormSubmission]):

    def __init__(self, session: AsyncSession):
        super().__init__(session, BlockyfyFormSubmission)
