import asyncio
from pathlib import Path
from uuid import uuid4

from app.core.dto.attachment import AttachmentUpload
from app.infrastructure.config.config import APP_CONFIG
from app.infrastructure.logging import get_logger


logger = get_logger(__name__)


class AttachmentStorage:
    """Writes uploaded files to a local directory under generated names."""

    def __init__(self, directory: str | Path, field_name: str = "attachments"):
        self.directory = Path(directory)
        self.field_name = field_name

    @classmethod
    def from_config(cls) -> "AttachmentStorage":
        return cls(APP_CONFIG.UPLOADS_DIR)

    def ensure_directory(self) -> None:
        if not self.directory.exists():
            self.directory.mkdir(parents=True, exist_ok=True)
            logger.info("uploads_directory_created", path=str(self.directory))

    def _generate_path(self, filename: str) -> Path:
        suffix = Path(filename).suffix
        return self.directory / f"{self.field_name}-{uuid4().hex}{suffix}"

    async def save(self, attachments: list[AttachmentUpload]) -> list[str]:
        """Store every attachment; on failure removes what was already written."""
        if not attachments:
            return []

        self.ensure_directory()
        saved: list[str] = []
        try:
            for attachment in attachments:
                path = self._generate_path(attachment.filename)
                await asyncio.to_thread(path.write_bytes, attachment.content)
                saved.append(str(path))
        except OSError:
            self.remove(saved)
            raise

        logger.info("attachments_saved", count=len(saved))
        return saved

    def remove(self, paths: list[str]) -> None:
        for path in paths:
            try:
                Path(path).unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("attachment_remove_failed", path=path, error=str(exc))
