"""
Module: recovery

Purpose:
    Resilient recovery of multiple-choice questions from free-form LLM
    output: wrapped in prose or code fences, full of LaTeX, single-quoted,
    trailing-comma'd, oddly keyed or truncated mid-object.

Key Functions:
    - parse_question(): Main entry point, raises on failure
    - recover_question(): Same pipeline, returns a typed RecoveryResult

Key Classes:
    - RecoveryConfig: Tunables (re-exported from core.config)
    - RecoveryResult / RecoveryStatus: Non-raising outcome
    - ParseLayer: Which fallback layer recovered the payload

Dependencies:
    - json5: Relaxed JSON grammar
    - quizgen_toolkit.core: Model, validator, post-processing
"""

from quizgen_toolkit.core.config import DEFAULT_CONFIG, RecoveryConfig

from .errors import QuestionRecoveryError, SchemaInvalidError, UnparseableInputError
from .layers import LayeredParse, ParseLayer, parse_layered
from .pipeline import (
    RecoveryResult,
    RecoveryStatus,
    parse_question,
    parse_question_or_fallback,
    recover_payload,
    recover_question,
)

__all__ = [
    "DEFAULT_CONFIG",
    "RecoveryConfig",
    "QuestionRecoveryError",
    "SchemaInvalidError",
    "UnparseableInputError",
    "LayeredParse",
    "ParseLayer",
    "parse_layered",
    "RecoveryResult",
    "RecoveryStatus",
    "parse_question",
    "parse_question_or_fallback",
    "recover_payload",
    "recover_question",
]
