from sqlalchemy import JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.models.base import Base
from app.infrastructure.database.models.form_submission import FormSubmissionMixin


class NextsenseFormSubmission(FormSubmissionMixin, Base):
    __tablename__ = "nextsense_form_submissions"

    first_name: Mapped[str]
    last_name: Mapped[str]
    email: Mapped[str] = mapped_column(index=True)
    interests: Mapped[list[str]] = mapped_column(JSON, default=list)
    budget: Mapped[str]
    privacy_policy_accepted: Mapped[bool] = mapped_column(default=False)

    def __repr__(self):
        return f"<NextsenseFormSubmission(email='{self.email}', synced={self.synced_to_brevo})>"
