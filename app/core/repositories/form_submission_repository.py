from uuid import UUID

from app.core.repositories.base import ModelType, SqlAlchemyRepository


class FormSubmissionRepository(SqlAlchemyRepository[ModelType]):

    async def update_sync_status(self, submission_id: UUID, brevo_contact_id: str | None) -> int:
        return await self.update_item(
            submission_id,
            synced_to_brevo=True,
            brevo_contact_id=brevo_contact_id,
        )
