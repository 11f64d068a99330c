"""
Quiz Toolkit Core Package

Shared data models, configuration and validation for the recovery
pipeline. Nothing in this package parses raw model output; it only
defines what an accepted question looks like.

**DESIGN NOTES:**

1. **Immutable Data Models**
   - CanonicalQuestion is a frozen dataclass, validated on construction
   - A new instance is produced per parse; nothing is cached

2. **Plain-Dict Validation**
   - `validate_question()` and `postprocess_question()` operate on the
     camelCase wire shape so they can be applied to any payload
   - Both are total functions and never raise
"""

from .config import DEFAULT_CONFIG, RecoveryConfig
from .models import CanonicalQuestion, JsonCandidate
from .schemas import ValidationError, check_question, postprocess_question, validate_question

__all__ = [
    "DEFAULT_CONFIG",
    "RecoveryConfig",
    "CanonicalQuestion",
    "JsonCandidate",
    "ValidationError",
    "check_question",
    "postprocess_question",
    "validate_question",
]
