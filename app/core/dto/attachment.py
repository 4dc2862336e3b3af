from pydantic import BaseModel


class AttachmentUpload(BaseModel):
    filename: str
    content_type: str | None = None
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)
