"""
Module: recovery.pipeline

Purpose:
    Main entry point for turning raw model output into an accepted
    CanonicalQuestion. Data flows strictly one way:

        raw -> normalize_text -> desugar_math -> locate_candidate_region
            -> balance_braces -> parse_layered -> normalize_question_schema
            -> postprocess_question -> check_question -> CanonicalQuestion

    No stage keeps state between calls, so every function here is safe to
    call concurrently.

Key Functions:
    - parse_question(): Raise on failure, return CanonicalQuestion
    - recover_question(): Never raise, return a typed RecoveryResult
    - parse_question_or_fallback(): Degrade to a caller-supplied question
    - recover_payload(): Normalized (unvalidated) payload and winning layer

Used By:
    - Callers holding raw LLM completions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from quizgen_toolkit.core.config import DEFAULT_CONFIG, RecoveryConfig
from quizgen_toolkit.core.models import CanonicalQuestion
from quizgen_toolkit.core.schemas import ValidationError, check_question, postprocess_question

from .candidates import balance_braces, locate_candidate_region
from .errors import QuestionRecoveryError, SchemaInvalidError, UnparseableInputError
from .layers import ParseLayer, parse_layered
from .math_text import desugar_math
from .normalizer import normalize_question_schema
from .text import normalize_text

logger = logging.getLogger(__name__)


class RecoveryStatus(str, Enum):
    """Outcome of a recovery attempt."""
    ACCEPTED = "accepted"
    UNPARSEABLE = "unparseable"
    SCHEMA_INVALID = "schema_invalid"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RecoveryResult:
    """
    Typed outcome of recover_question().

    Attributes:
        status: ACCEPTED, UNPARSEABLE or SCHEMA_INVALID
        question: Accepted question (ACCEPTED only)
        layer: Parse layer that recovered the payload (None if UNPARSEABLE)
        errors: Failure messages (empty if ACCEPTED)
    """
    status: RecoveryStatus
    question: Optional[CanonicalQuestion] = None
    layer: Optional[ParseLayer] = None
    errors: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """True if a question was accepted."""
        return self.status is RecoveryStatus.ACCEPTED


def _preview(raw: Any, config: RecoveryConfig) -> str:
    return raw[:config.log_preview_chars] if isinstance(raw, str) else repr(raw)[:config.log_preview_chars]


def recover_payload(
    raw: Any,
    *,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> tuple[dict[str, Any], ParseLayer]:
    """
    Recover a normalized question payload without validating it.

    Args:
        raw: Raw model output
        config: Recovery settings

    Returns:
        (payload, layer) where payload has the canonical keys

    Raises:
        UnparseableInputError: If raw is not a string or no layer succeeds
    """
    if not isinstance(raw, str):
        raise UnparseableInputError(
            f"Invalid content provided: expected str, got {type(raw).__name__}",
            preview=_preview(raw, config),
        )

    text = desugar_math(normalize_text(raw))
    candidate = locate_candidate_region(text)
    region = candidate.text if candidate is not None else text
    parsed = parse_layered(balance_braces(region), preview_chars=config.log_preview_chars)

    payload = normalize_question_schema(parsed.payload, config=config)
    return payload, parsed.layer


def _recover(
    raw: Any,
    config: RecoveryConfig,
    strict: bool,
) -> tuple[CanonicalQuestion, ParseLayer]:
    payload, layer = recover_payload(raw, config=config)
    record = postprocess_question(payload, config=config)

    try:
        check_question(record, strict=strict, config=config)
        question = CanonicalQuestion.from_dict(record)
    except ValidationError as e:
        raise SchemaInvalidError(
            str(e),
            errors=e.errors,
            payload=record,
            preview=_preview(raw, config),
            layer=layer,
        ) from e
    except ValueError as e:
        raise SchemaInvalidError(
            f"Invalid question: {e}",
            errors=[str(e)],
            payload=record,
            preview=_preview(raw, config),
            layer=layer,
        ) from e

    return question, layer


def parse_question(
    raw: Any,
    *,
    strict: bool = False,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> CanonicalQuestion:
    """
    Parse raw model output into an accepted question.

    Args:
        raw: Raw model output, possibly wrapped in prose, fenced, or truncated
        strict: Also validate against the bundled JSON Schema
        config: Recovery settings

    Returns:
        CanonicalQuestion

    Raises:
        UnparseableInputError: If no recovery layer produced an object
        SchemaInvalidError: If the recovered object is not a valid question

    Example:
        >>> q = parse_question('Here you go: {"question": "2 + 2?", '
        ...     '"options": ["1", "2", "3", "4"], "correctAnswer": "D", '
        ...     '"explanation": "Basic sum."}')
        >>> q.correct_option
        '4'
    """
    question, _ = _recover(raw, config, strict)
    return question


def recover_question(
    raw: Any,
    *,
    strict: bool = False,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> RecoveryResult:
    """
    Parse raw model output, reporting failure as a value instead of raising.

    Lets callers tell "nothing parseable" (worth regenerating) apart from
    "parsed but invalid".

    Returns:
        RecoveryResult
    """
    try:
        question, layer = _recover(raw, config, strict)
    except UnparseableInputError as e:
        logger.warning(f"Unparseable response: {e} (preview: {e.preview!r})")
        return RecoveryResult(status=RecoveryStatus.UNPARSEABLE, errors=(str(e),))
    except SchemaInvalidError as e:
        logger.warning(f"Recovered question failed validation: {'; '.join(e.errors)}")
        return RecoveryResult(
            status=RecoveryStatus.SCHEMA_INVALID, layer=e.layer, errors=tuple(e.errors)
        )

    return RecoveryResult(status=RecoveryStatus.ACCEPTED, question=question, layer=layer)


def parse_question_or_fallback(
    raw: Any,
    fallback: CanonicalQuestion,
    *,
    strict: bool = False,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> CanonicalQuestion:
    """
    Parse raw model output, degrading to a canned question on any failure.

    Args:
        raw: Raw model output
        fallback: Question returned when recovery or validation fails

    Returns:
        Parsed question, or fallback
    """
    try:
        return parse_question(raw, strict=strict, config=config)
    except QuestionRecoveryError as e:
        logger.warning(f"Using fallback question after {type(e).__name__}: {e}")
        return fallback
