from .base import Base
from .nextsense_form import NextsenseFormSubmission
from .blockyfy_form import BlockyfyFormSubmission


__all__ = [
    "Base",
    "NextsenseFormSubmission",
    "BlockyfyFormSubmission",
]
