"""
Module: recovery.errors

Caller-visible failure types of the recovery pipeline. Internal stages
never raise these; only the pipeline boundary does.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .layers import ParseLayer


class QuestionRecoveryError(Exception):
    """Base class for recovery failures."""

    def __init__(self, message: str, preview: str = ""):
        super().__init__(message)
        self.preview = preview


class UnparseableInputError(QuestionRecoveryError):
    """No recovery layer produced an object. Carries no partial result."""
    pass


class SchemaInvalidError(QuestionRecoveryError):
    """
    An object was recovered but failed question validation.

    Attributes:
        errors: Validator messages
        payload: The rejected record
        layer: Parse layer that recovered the record
    """

    def __init__(
        self,
        message: str,
        errors: Optional[list[str]] = None,
        payload: Optional[dict[str, Any]] = None,
        preview: str = "",
        layer: Optional[ParseLayer] = None,
    ):
        super().__init__(message, preview=preview)
        self.errors = errors or []
        self.payload = payload
        self.layer = layer
