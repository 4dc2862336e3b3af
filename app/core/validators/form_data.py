from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError
from starlette.datastructures import FormData, UploadFile

from app.core.dto.attachment import AttachmentUpload
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.errors.form_errors import (
    AttachmentTooLarge,
    FormValidationError,
    TooManyAttachments,
)
from app.utils.error_extra import format_validation_errors


ATTACHMENTS_FIELD = "attachments"

ModelT = TypeVar("ModelT", bound=BaseModel)


def form_to_payload(form: FormData) -> dict[str, Any]:
    """Plain dict of the non-file fields; repeated keys become lists."""
    payload: dict[str, Any] = {}
    for key in form.keys():
        if key == ATTACHMENTS_FIELD:
            continue
        values = form.getlist(key)
        payload[key] = values[0] if len(values) == 1 else values
    return payload


async def read_attachments(form: FormData, max_size_bytes: int | None = None) -> list[AttachmentUpload]:
    """Read file parts, at most one byte past the size limit each.

    An oversized file is kept truncated so the size check still fails for it.
    """
    read_limit = -1 if max_size_bytes is None else max_size_bytes + 1
    attachments = []
    for item in form.getlist(ATTACHMENTS_FIELD):
        # browsers post an empty file part when nothing was selected
        if not isinstance(item, UploadFile) or not item.filename:
            continue
        content = await item.read(read_limit)
        attachments.append(
            AttachmentUpload(
                filename=item.filename,
                content_type=item.content_type,
                content=content,
            )
        )
    return attachments


def validate_attachments(
    attachments: list[AttachmentUpload],
    max_count: int,
    max_size_bytes: int,
) -> list[dict[str, str]]:
    errors: list[dict[str, str]] = []
    if len(attachments) > max_count:
        errors.extend(TooManyAttachments(max_count).errors)

    max_size_mb = max_size_bytes / (1024 * 1024)
    for attachment in attachments:
        if attachment.size > max_size_bytes:
            errors.extend(AttachmentTooLarge(attachment.filename, max_size_mb).errors)
    return errors


def validate_payload(model_cls: type[ModelT], payload: dict[str, Any]) -> tuple[ModelT | None, list[dict[str, str]]]:
    try:
        return model_cls.model_validate(payload), []
    except ValidationError as exc:
        return None, format_validation_errors(exc.errors())


async def parse_multipart_submission(
    form: FormData,
    model_cls: type[ModelT],
    max_count: int | None = None,
    max_size_bytes: int | None = None,
) -> tuple[ModelT, list[AttachmentUpload]]:
    """Validate a multipart submission and its files in one pass.

    Raises FormValidationError listing every field and attachment problem
    found, so nothing is written when any constraint is violated.
    """
    max_count = APP_CONFIG.MAX_ATTACHMENTS if max_count is None else max_count
    max_size_bytes = APP_CONFIG.max_attachment_size_bytes if max_size_bytes is None else max_size_bytes

    data, errors = validate_payload(model_cls, form_to_payload(form))

    attachments = await read_attachments(form, max_size_bytes)
    errors.extend(validate_attachments(attachments, max_count, max_size_bytes))

    if errors:
        raise FormValidationError(errors)
    return data, attachments
