from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SubmissionResponseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Form submitted successfully"
    submission_id: UUID = Field(..., alias="submissionId")
