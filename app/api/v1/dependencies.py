from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.crm.brevo_client import BrevoContactsClient
from app.infrastructure.database.adapters.pg_connection import DatabaseConnection
from app.infrastructure.email.sender import EmailService
from app.infrastructure.storage.attachments import AttachmentStorage
import app.core.repositories as repositories
import app.core.services as services


def get_db_connection(request: Request) -> DatabaseConnection:
    return request.app.state.db_connection


async def get_db_session(
    db_connection: Annotated[DatabaseConnection, Depends(get_db_connection)],
) -> AsyncGenerator[AsyncSession, None]:
    session = await db_connection.get_session()
    try:
        yield session
    finally:
        await session.close()


def get_attachment_storage(request: Request) -> AttachmentStorage:
    return request.app.state.attachment_storage


def get_brevo_client(request: Request) -> BrevoContactsClient:
    return request.app.state.brevo_client


def get_email_service(request: Request) -> EmailService:
    return request.app.state.email_service


async def get_nextsense_form_service(
    db_connection: Annotated[DatabaseConnection, Depends(get_db_connection)],
    storage: Annotated[AttachmentStorage, Depends(get_attachment_storage)],
    crm_client: Annotated[BrevoContactsClient, Depends(get_brevo_client)],
    email_service: Annotated[EmailService, Depends(get_email_service)],
    session=Depends(get_db_session),
) -> services.NextsenseFormService:
    return services.NextsenseFormService(
        repository=repositories.NextsenseFormRepository(session=session),
        db_connection=db_connection,
        storage=storage,
        crm_client=crm_client,
        email_service=email_service,
    )


async def get_blockyfy_form_service(
    db_connection: Annotated[DatabaseConnection, Depends(get_db_connection)],
    storage: Annotated[AttachmentStorage, Depends(get_attachment_storage)],
    crm_client: Annotated[BrevoContactsClient, Depends(get_brevo_client)],
    email_service: Annotated[EmailService, Depends(get_email_service)],
    session=Depends(get_db_session),
) -> services.BlockyfyFormService:
    return services.BlockyfyFormService(
        repository=repositories.BlockyfyFormRepository(session=session),
        db_connection=db_connection,
        storage=storage,
        crm_client=crm_client,
        email_service=email_service,
    )
