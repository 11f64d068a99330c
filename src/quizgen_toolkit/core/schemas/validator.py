"""
Schema Validation Utilities

Validates question records (plain dicts in the camelCase wire shape)
before they are accepted as CanonicalQuestion instances.

Two entry points:
- `validate_question()` is a total predicate: any input, never raises.
- `check_question()` raises ValidationError listing every violation,
  and in strict mode also runs the bundled JSON Schema through
  `jsonschema`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

import jsonschema

from ..config import DEFAULT_CONFIG, RecoveryConfig


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when a question record fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def _has_text(value: Any, min_length: int) -> bool:
    return isinstance(value, str) and len(value.strip()) >= min_length


def _is_int(value: Any) -> bool:
    # bool is an int subclass but never a valid index
    return isinstance(value, int) and not isinstance(value, bool)


def collect_question_errors(
    record: Any,
    *,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> list[str]:
    """
    List every structural violation in a question record.

    Args:
        record: Candidate record (any type)
        config: Option count and text length bounds

    Returns:
        Human-readable violations; empty if the record is valid
    """
    if not isinstance(record, Mapping):
        return [f"record must be an object, got {type(record).__name__}"]

    errors: list[str] = []
    min_text = config.min_text_length

    if not _has_text(record.get("question"), min_text):
        errors.append(f"question: must be a string of at least {min_text} characters")

    options = record.get("options")
    if not isinstance(options, list):
        errors.append("options: must be an array")
    else:
        if not (config.min_options <= len(options) <= config.max_options):
            errors.append(
                f"options: must have {config.min_options}-{config.max_options} "
                f"entries, got {len(options)}"
            )
        for i, option in enumerate(options):
            if not _has_text(option, 1):
                errors.append(f"options[{i}]: must be a non-blank string")

    answer = record.get("correctAnswer")
    if not _is_int(answer):
        errors.append(f"correctAnswer: must be an integer, got {answer!r}")
    elif isinstance(options, list) and not (0 <= answer < len(options)):
        errors.append(f"correctAnswer: {answer} out of range for {len(options)} options")

    if not _has_text(record.get("explanation"), min_text):
        errors.append(f"explanation: must be a string of at least {min_text} characters")

    # Image fields are validated as a pair
    has_image = "image" in record
    if has_image:
        if not _has_text(record["image"], 1):
            errors.append("image: must be a non-empty string when present")
        if not _has_text(record.get("imageDescription"), min_text):
            errors.append(
                f"imageDescription: required with image, at least {min_text} characters"
            )
    elif record.get("imageDescription") is not None:
        errors.append("imageDescription: present without image")

    return errors


def check_question(
    record: Any,
    *,
    strict: bool = False,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> None:
    """
    Validate a question record, raising on the first failing check stage.

    Args:
        record: Question dictionary to validate
        strict: If True, also validate against question.schema.json
        config: Option count and text length bounds

    Raises:
        ValidationError: If the record is invalid
    """
    errors = collect_question_errors(record, config=config)
    if errors:
        raise ValidationError(
            f"Invalid question: {errors[0]}" + (f" (+{len(errors) - 1} more)" if len(errors) > 1 else ""),
            path=errors[0].split(":", 1)[0],
            errors=errors,
        )

    if strict:
        schema = _load_schema("question")
        try:
            jsonschema.validate(dict(record), schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            )


def validate_question(
    record: Any,
    *,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> bool:
    """
    Return True if the record satisfies every question invariant.

    Pure predicate over arbitrary input; never raises.

    Example:
        >>> validate_question({"question": "Q?", "options": ["a", "b", "c"]})
        False
    """
    return not collect_question_errors(record, config=config)
