"""
Schemas Package

Question validation and post-processing utilities.
"""

from .postprocess import is_placeholder_image, postprocess_question
from .validator import (
    ValidationError,
    check_question,
    collect_question_errors,
    validate_question,
)

__all__ = [
    "ValidationError",
    "check_question",
    "collect_question_errors",
    "is_placeholder_image",
    "postprocess_question",
    "validate_question",
]
