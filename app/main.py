from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1.routers import api_v1_routers
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.crm.brevo_client import BrevoContactsClient
from app.infrastructure.database.adapters.pg_connection import DatabaseConnection
from app.infrastructure.email.sender import EmailService
from app.infrastructure.logging.logger import configure_logging, get_logger
from app.infrastructure.middleware import LoggingMiddleware
from app.infrastructure.storage.attachments import AttachmentStorage
from app.utils.error_extra import error_response, format_validation_errors


configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app):
    logger.info("application_startup", app_name=APP_CONFIG.APP_NAME, debug=APP_CONFIG.DEBUG)

    db_connection = DatabaseConnection()
    await db_connection.create_tables()
    app.state.db_connection = db_connection
    logger.info("database_connected")

    storage = AttachmentStorage.from_config()
    storage.ensure_directory()
    app.state.attachment_storage = storage

    app.state.brevo_client = BrevoContactsClient.from_config()
    app.state.email_service = EmailService.from_config()

    yield

    await db_connection.close()
    logger.info("application_shutdown")


app = FastAPI(
    title=APP_CONFIG.APP_NAME,
    debug=APP_CONFIG.DEBUG,
    lifespan=lifespan
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=APP_CONFIG.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.add_middleware(LoggingMiddleware)


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.info("request_validation_failed", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": error_response(errors)},
    )


app.include_router(api_v1_routers)


if __name__ == "__main__":
    uvicorn.run("app.main:app", host=APP_CONFIG.HOST, port=APP_CONFIG.PORT)
