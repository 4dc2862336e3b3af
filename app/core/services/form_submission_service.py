import asyncio
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from fastapi import BackgroundTasks
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from app.core.dto.attachment import AttachmentUpload
from app.core.dto.crm import CrmContact
from app.core.dto.email import AdminNotificationEmailData, SendEmailResult, ThankYouEmailData
from app.core.dto.submission import SubmissionResponseModel
from app.core.repositories.form_submission_repository import FormSubmissionRepository
from app.infrastructure.crm.brevo_client import BrevoContactsClient
from app.infrastructure.database.adapters.pg_connection import DatabaseConnection
from app.infrastructure.email.sender import EmailService
from app.infrastructure.errors.base import PersistenceError
from app.infrastructure.logging import get_logger
from app.infrastructure.storage.attachments import AttachmentStorage
from app.utils.enums import FormType


logger = get_logger(__name__)

SubmissionDTO = TypeVar("SubmissionDTO", bound=BaseModel)

# strong references to fallback tasks until they finish
_pending_tasks: set[asyncio.Task] = set()


class FormSubmissionService(ABC, Generic[SubmissionDTO]):
    """Persists a submission, then syncs the CRM and sends emails in the background.

    The caller only sees validation and persistence. Everything after the
    database write is best effort: failures are logged, never raised, and
    never retried.
    """

    form_type: ClassVar[FormType]
    model_class: ClassVar[type]
    dto_class: ClassVar[type[BaseModel]]
    repository_class: ClassVar[type[FormSubmissionRepository]]

    def __init__(
        self,
        repository: FormSubmissionRepository,
        db_connection: DatabaseConnection,
        storage: AttachmentStorage,
        crm_client: BrevoContactsClient,
        email_service: EmailService,
    ):
        self.repository = repository
        self.db_connection = db_connection
        self.storage = storage
        self.crm_client = crm_client
        self.email_service = email_service

    @abstractmethod
    def build_crm_contact(self, submission: SubmissionDTO) -> CrmContact:
        ...

    @abstractmethod
    def build_thank_you_data(self, submission: SubmissionDTO) -> ThankYouEmailData:
        ...

    @abstractmethod
    def build_admin_notification_data(self, submission: SubmissionDTO) -> AdminNotificationEmailData:
        ...

    def _build_record_values(self, data: BaseModel, attachment_paths: list[str]) -> dict[str, Any]:
        return {**data.model_dump(), "attachments": attachment_paths}

    async def create_submission(
        self,
        data: BaseModel,
        attachments: list[AttachmentUpload] | None = None,
        background_tasks: BackgroundTasks | None = None,
    ) -> SubmissionResponseModel:
        attachment_paths: list[str] = []
        try:
            attachment_paths = await self.storage.save(attachments or [])
            submission = self.model_class(**self._build_record_values(data, attachment_paths))
            created = await self.repository.add_item(submission)
        except (OSError, SQLAlchemyError) as exc:
            logger.error(
                "form_submission_failed",
                form_type=self.form_type.value,
                error=str(exc),
                exc_info=True,
            )
            self.storage.remove(attachment_paths)
            raise PersistenceError()

        logger.info(
            "form_submission_saved",
            form_type=self.form_type.value,
            submission_id=str(created.id),
            attachments=len(attachment_paths),
        )

        if background_tasks is not None:
            background_tasks.add_task(self.process_submission, created.id)
        else:
            task = asyncio.create_task(self.process_submission(created.id))
            _pending_tasks.add(task)
            task.add_done_callback(_pending_tasks.discard)

        return SubmissionResponseModel(submission_id=created.id)

    async def process_submission(self, submission_id: UUID) -> None:
        try:
            async with await self.db_connection.get_session() as session:
                repository = self.repository_class(session=session)

                record = await repository.get_item(submission_id)
                if record is None:
                    logger.warning("submission_not_found", submission_id=str(submission_id))
                    return
                submission = self.dto_class.model_validate(record, from_attributes=True)

                brevo_contact_id = await self._sync_contact(submission)

                await repository.update_sync_status(submission_id, brevo_contact_id)
                submission = submission.model_copy(
                    update={"synced_to_brevo": True, "brevo_contact_id": brevo_contact_id}
                )

            await self._send_notification_emails(submission)
        except Exception as exc:
            logger.error(
                "submission_processing_failed",
                submission_id=str(submission_id),
                error=str(exc),
                exc_info=True,
            )

    async def _sync_contact(self, submission: SubmissionDTO) -> str | None:
        try:
            contact_id = await self.crm_client.upsert(self.build_crm_contact(submission))
        except Exception as exc:
            logger.error("brevo_sync_failed", submission_id=str(submission.id), error=str(exc))
            return None

        if contact_id:
            logger.info("brevo_contact_synced", submission_id=str(submission.id), contact_id=contact_id)
        return contact_id

    async def _send_notification_emails(self, submission: SubmissionDTO) -> None:
        thank_you_result, admin_result = await asyncio.gather(
            self.email_service.send_thank_you_email(self.build_thank_you_data(submission)),
            self.email_service.send_admin_notification(self.build_admin_notification_data(submission)),
            return_exceptions=True,
        )
        self._log_email_result("thank_you", submission, thank_you_result)
        self._log_email_result("admin_notification", submission, admin_result)

    @staticmethod
    def _log_email_result(kind: str, submission: SubmissionDTO, result: SendEmailResult | BaseException) -> None:
        if isinstance(result, BaseException):
            logger.warning("email_failed", kind=kind, submission_id=str(submission.id), error=str(result))
        elif not result.success:
            logger.warning("email_failed", kind=kind, submission_id=str(submission.id), error=result.error)
