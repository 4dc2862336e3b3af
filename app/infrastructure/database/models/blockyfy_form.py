from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.models.base import Base
from app.infrastructure.database.models.form_submission import FormSubmissionMixin


class BlockyfyFormSubmission(FormSubmissionMixin, Base):
    __tablename__ = "blockyfy_form_submissions"

    name: Mapped[str]
    email: Mapped[str] = mapped_column(index=True)
    phone_number: Mapped[str]
    budget: Mapped[str]
    source: Mapped[str]

    def __repr__(self):
        return f"<BlockyfyFormSubmission(email='{self.email}', synced={self.synced_to_brevo})>"
