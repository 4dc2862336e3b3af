from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status

from app.api.v1.dependencies import get_blockyfy_form_service
from app.core.dto.blockyfy_form import BlockyfyFormCreateModel
from app.core.dto.submission import SubmissionResponseModel
from app.core.services.blockyfy_form_service import BlockyfyFormService
from app.core.validators.form_data import parse_multipart_submission


router = APIRouter()


@router.post(
    "/submit",
    response_model=SubmissionResponseModel,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"description": "Validation error or invalid input"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Submission could not be stored"},
    },
    summary="Submit Blockyfy form with file uploads",
    description=(
        'Accepts multipart/form-data. Use the "attachments" field to upload '
        "files (max 5 files, 5MB each)."
    ),
)
async def submit_form(
    request: Request,
    background_tasks: BackgroundTasks,
    service: Annotated[BlockyfyFormService, Depends(get_blockyfy_form_service)],
) -> SubmissionResponseModel:
    form = await request.form()
    data, attachments = await parse_multipart_submission(form, BlockyfyFormCreateModel)
    return await service.create_submission(data, attachments, background_tasks=background_tasks)
