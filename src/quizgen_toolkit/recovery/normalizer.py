"""
Module: recovery.normalizer

Purpose:
    Map a parsed object of unknown shape onto the canonical question shape
    (camelCase wire dict). The result is NOT validated here; structural
    invariants are enforced by core.schemas.validator.

Key Functions:
    - normalize_question_schema(): Full normalization of a parsed payload
    - unwrap_payload(): Find a nested object carrying the four core keys
    - coerce_options(): Array / lettered-object options -> list[str]
    - resolve_correct_answer(): Index / letter / text / object -> int

Aliasing:
    Each canonical field reads the first present key from an explicit,
    ordered alias tuple below. "Present" means the key exists and its
    value is not None (and, for text fields, not blank).

Used By:
    - recovery.pipeline
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from quizgen_toolkit.core.config import DEFAULT_CONFIG, RecoveryConfig

from .math_text import desugar_math

logger = logging.getLogger(__name__)

# ─────────────────────────────────────────────────────────────────────────────
# Alias tables (first present wins)
# ─────────────────────────────────────────────────────────────────────────────

QUESTION_KEYS = ("question", "prompt", "stem")
OPTION_KEYS = ("options", "choices", "answers")
EXPLANATION_KEYS = ("explanation", "rationale", "solution", "reason")
CORRECT_ANSWER_KEYS = ("correctAnswer", "answer", "correct", "correctIndex")
PASSAGE_KEYS = ("passage", "context", "reading")
IMAGE_KEYS = ("image", "imageUrl", "diagram")
IMAGE_DESCRIPTION_KEYS = ("imageDescription", "alt", "caption")

# Keys an object must carry at top level to be taken as the question itself
CORE_KEYS = ("question", "options", "correctAnswer", "explanation")

# Option objects inside an options array, e.g. {"text": "Paris"}
OPTION_TEXT_KEYS = ("text", "option", "value", "label")

LETTERS = "ABCDE"
UNRESOLVED_ANSWER = -1


def _is_present(value: Any, *, text: bool = False) -> bool:
    if value is None:
        return False
    if text and isinstance(value, str) and not value.strip():
        return False
    return True


def first_present(obj: Mapping[str, Any], keys: Sequence[str], *, text: bool = False) -> Any:
    """Return the value of the first present key in keys, or None."""
    for key in keys:
        if key in obj and _is_present(obj[key], text=text):
            return obj[key]
    return None


def _stringify(value: Any) -> str:
    """Text of a scalar as it reads in JSON: True -> "true", 1.0 -> "1"."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ─────────────────────────────────────────────────────────────────────────────
# Unwrapping
# ─────────────────────────────────────────────────────────────────────────────

def _find_core_object(obj: Mapping[str, Any], depth: int, max_depth: int) -> Optional[Mapping[str, Any]]:
    if all(key in obj for key in CORE_KEYS):
        return obj
    if depth >= max_depth:
        return None
    for value in obj.values():
        if isinstance(value, Mapping):
            found = _find_core_object(value, depth + 1, max_depth)
            if found is not None:
                return found
    return None


def unwrap_payload(
    obj: Mapping[str, Any],
    *,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> Mapping[str, Any]:
    """
    Locate the object that actually holds the question.

    Depth-first over object-valued properties in insertion order, first
    match wins, at most config.unwrap_max_depth levels deep. If no object
    carries all of question/options/correctAnswer/explanation, the input
    is returned as-is.

    Example:
        >>> unwrap_payload({"data": {"question": "Q", "options": [],
        ...                          "correctAnswer": 0, "explanation": "E"}})["question"]
        'Q'
    """
    found = _find_core_object(obj, 0, config.unwrap_max_depth)
    return found if found is not None else obj


# ─────────────────────────────────────────────────────────────────────────────
# Coercion
# ─────────────────────────────────────────────────────────────────────────────

def _option_text(item: Any) -> Optional[str]:
    if item is None:
        return None
    if isinstance(item, Mapping):
        item = first_present(item, OPTION_TEXT_KEYS)
        if item is None:
            return None
    return _stringify(item).strip()


def _letter_key(key: Any) -> Optional[str]:
    """Normalize "a", "B.", " c " to a capital letter, or None."""
    if not isinstance(key, str):
        return None
    key = key.strip()
    if key.endswith("."):
        key = key[:-1]
    key = key.upper()
    return key if len(key) == 1 and key in LETTERS else None


def coerce_options(options: Any) -> list[str]:
    """
    Coerce any options encoding to an ordered list of trimmed strings.

    - list: each element stringified and trimmed, blanks dropped
    - object: keys A-E (any case, optional trailing period) in that order
    - anything else: []

    Example:
        >>> coerce_options({"b": "y", "A.": "x"})
        ['x', 'y']
    """
    if isinstance(options, (list, tuple)):
        texts = (_option_text(item) for item in options)
        return [text for text in texts if text]

    if isinstance(options, Mapping):
        by_letter: dict[str, Any] = {}
        for key, value in options.items():
            letter = _letter_key(key)
            if letter is not None and letter not in by_letter:
                by_letter[letter] = value
        texts = (_option_text(by_letter.get(letter)) for letter in LETTERS)
        return [text for text in texts if text]

    return []


def _letter_index(value: str) -> Optional[int]:
    letter = _letter_key(value)
    return LETTERS.index(letter) if letter is not None else None


def resolve_correct_answer(
    correct: Any,
    options: Sequence[str],
    *,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> int | float:
    """
    Resolve the many encodings of a correct answer to an option index.

    Resolution order:
        - number: used as-is (integral floats become int)
        - string: letter A-E, then case-insensitive option text,
          then a digit string
        - object: numeric "index", then letter "letter"

    Unresolved answers become 0, or -1 under
    config.strict_answer_resolution. The range is not checked here.

    Example:
        >>> resolve_correct_answer("b", ["x", "y", "z", "w"])
        1
    """
    if isinstance(correct, (int, float)) and not isinstance(correct, bool):
        if isinstance(correct, float) and correct.is_integer():
            return int(correct)
        return correct
    elif isinstance(correct, str):
        trimmed = correct.strip()
        index = _letter_index(trimmed)
        if index is not None:
            return index
        lowered = trimmed.lower()
        for i, option in enumerate(options):
            if option.lower() == lowered:
                return i
        if trimmed.isdigit():
            return int(trimmed)
    elif isinstance(correct, Mapping):
        index = correct.get("index")
        if isinstance(index, int) and not isinstance(index, bool):
            return index
        letter = correct.get("letter")
        if isinstance(letter, str):
            index = _letter_index(letter)
            if index is not None:
                return index

    if config.strict_answer_resolution:
        logger.debug(f"Unresolved correct answer {correct!r}, marking invalid")
        return UNRESOLVED_ANSWER
    logger.debug(f"Unresolved correct answer {correct!r}, defaulting to 0")
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Normalization
# ─────────────────────────────────────────────────────────────────────────────

def _optional_text(obj: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    value = first_present(obj, keys, text=True)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def normalize_question_schema(
    raw: Any,
    *,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> Any:
    """
    Map a parsed payload onto the canonical question shape.

    Steps: unwrap nested wrappers, resolve field aliases, coerce options
    and the correct answer, keep non-blank optional fields, truncate
    options to config.max_options, then desugar math in the question,
    passage, explanation and every option.

    Args:
        raw: Parsed object; non-mappings are returned unchanged

    Returns:
        Dict with question/options/correctAnswer/explanation and any of
        passage/image/imageDescription. Not validated.
    """
    if not isinstance(raw, Mapping):
        return raw

    obj = unwrap_payload(raw, config=config)

    options = coerce_options(first_present(obj, OPTION_KEYS))
    correct = first_present(obj, CORRECT_ANSWER_KEYS)

    result: dict[str, Any] = {
        "question": _stringify(first_present(obj, QUESTION_KEYS, text=True)).strip(),
        "options": options[:config.max_options],
        "correctAnswer": resolve_correct_answer(correct, options, config=config),
        "explanation": _stringify(first_present(obj, EXPLANATION_KEYS, text=True)).strip(),
    }

    passage = _optional_text(obj, PASSAGE_KEYS)
    if passage is not None:
        result["passage"] = passage
    image = _optional_text(obj, IMAGE_KEYS)
    if image is not None:
        result["image"] = image
    image_description = _optional_text(obj, IMAGE_DESCRIPTION_KEYS)
    if image_description is not None:
        result["imageDescription"] = image_description

    # Values captured by regex, or LaTeX inside well-formed JSON strings,
    # never went through the text-level desugaring
    result["question"] = desugar_math(result["question"]).strip()
    if "passage" in result:
        result["passage"] = desugar_math(result["passage"]).strip()
    result["explanation"] = desugar_math(result["explanation"]).strip()
    result["options"] = [desugar_math(option).strip() for option in result["options"]]

    return result
