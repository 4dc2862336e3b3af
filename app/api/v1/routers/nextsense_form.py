from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status

from app.api.v1.dependencies import get_nextsense_form_service
from app.core.dto.nextsense_form import NextsenseFormCreateModel
from app.core.dto.submission import SubmissionResponseModel
from app.core.services.nextsense_form_service import NextsenseFormService
from app.core.validators.form_data import parse_multipart_submission


router = APIRouter()

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"description": "Validation error or invalid input"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Submission could not be stored"},
}


@router.post(
    "/submit",
    response_model=SubmissionResponseModel,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Submit Nextsense form with file uploads",
    description=(
        'Accepts multipart/form-data. Use the "attachments" field to upload '
        "files (max 5 files, 5MB each)."
    ),
)
async def submit_form(
    request: Request,
    background_tasks: BackgroundTasks,
    service: Annotated[NextsenseFormService, Depends(get_nextsense_form_service)],
) -> SubmissionResponseModel:
    form = await request.form()
    data, attachments = await parse_multipart_submission(form, NextsenseFormCreateModel)
    return await service.create_submission(data, attachments, background_tasks=background_tasks)


@router.post(
    "/submit-json",
    response_model=SubmissionResponseModel,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Submit Nextsense form as JSON (no file uploads)",
)
async def submit_form_json(
    data: NextsenseFormCreateModel,
    background_tasks: BackgroundTasks,
    service: Annotated[NextsenseFormService, Depends(get_nextsense_form_service)],
) -> SubmissionResponseModel:
    return await service.create_submission(data, [], background_tasks=background_tasks)
