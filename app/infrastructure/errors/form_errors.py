from fastapi import HTTPException, status

from app.utils.error_extra import error_response


class FormValidationError(HTTPException):
    """Submission payload failed validation; carries every violated constraint."""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        super().__init__(status_code=self.status_code, detail=error_response(errors))


class TooManyAttachments(FormValidationError):
    def __init__(self, max_count: int):
        super().__init__([
            {
                "field": "attachments",
                "message": f"Too many files. Maximum allowed: {max_count}",
            }
        ])


class AttachmentTooLarge(FormValidationError):
    def __init__(self, filename: str, max_size_mb: float):
        super().__init__([
            {
                "field": "attachments",
                "message": f"File '{filename}' is too large. Maximum size: {max_size_mb:g}MB",
            }
        ])
