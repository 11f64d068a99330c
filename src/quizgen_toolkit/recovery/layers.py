"""
Module: recovery.layers

Purpose:
    Ordered fallback chain that turns a candidate string into a Python
    object. Each layer runs only if every earlier one failed; the first
    success wins and nothing is merged or scored.

Layers:
    1. strict     - json.loads, standard grammar
    2. relaxed    - control-character tolerant json.loads, then json5
    3. heuristic  - quote bare keys / swap single quotes, then relaxed
    4. salvage    - innermost {...} holding "question" and "options"
    5. fields     - regex capture of individual fields

Key Functions:
    - parse_layered(): Run the chain, raise UnparseableInputError if exhausted

Dependencies:
    - json5: JSON5 grammar for the relaxed layers

Used By:
    - recovery.pipeline
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import json5

from .errors import UnparseableInputError

logger = logging.getLogger(__name__)


class ParseLayer(str, Enum):
    """Name of the recovery layer that produced a payload."""
    STRICT = "strict"
    RELAXED = "relaxed"
    HEURISTIC = "heuristic"
    SALVAGE = "salvage"
    FIELDS = "fields"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class LayeredParse:
    """
    Successful layered parse.

    Attributes:
        payload: Parsed object (unknown shape, not yet normalized)
        layer: Layer that produced it
    """
    payload: dict[str, Any]
    layer: ParseLayer


# Heuristic repair
BARE_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*:)")
DOUBLE_QUOTED_RE = re.compile(r'"[^"]*"')
SINGLE_QUOTED_RE = re.compile(r"'([^']*)'")

# Nested-object salvage
INNER_QUESTION_RE = re.compile(r'\{[^{}]*"question"[^{}]*"options"[^{}]*\}')

# Field-by-field extraction
QUESTION_BEFORE_OPTIONS_RE = re.compile(r'"question"\s*:\s*"([\s\S]*?)"\s*,\s*"options"')
QUESTION_FIELD_RE = re.compile(r'"question"\s*:\s*"([\s\S]*?)"\s*[,}]')
OPTIONS_FIELD_RE = re.compile(r'"options"\s*:\s*\[([\s\S]*?)\]')
OPTION_SPLIT_RE = re.compile(r'"\s*,\s*"')
CORRECT_FIELD_RE = re.compile(r'"correctAnswer"\s*:\s*([0-4])')
EXPLANATION_FIELD_RE = re.compile(r'"explanation"\s*:\s*"([\s\S]*?)"[\s,}]')
MAX_FIELD_OPTIONS = 5

# Errors a layer may raise that mean "this layer did not produce output"
LAYER_ERRORS = (ValueError, TypeError, IndexError, RecursionError)


def _as_payload(value: Any) -> Optional[dict[str, Any]]:
    """Objects pass through, arrays yield their first object, scalars fail."""
    if isinstance(value, dict):
        return value
    if isinstance(value, list):
        for item in value:
            if isinstance(item, dict):
                return item
    return None


def _unescape(raw: str) -> str:
    """Decode JSON escapes in a regex-captured string body if it is well formed."""
    try:
        return json.loads(f'"{raw}"', strict=False)
    except ValueError:
        return raw


# ─────────────────────────────────────────────────────────────────────────────
# Layers
# ─────────────────────────────────────────────────────────────────────────────

def parse_strict(text: str) -> Any:
    """Standard JSON, no tolerance."""
    return json.loads(text)


def parse_relaxed(text: str) -> Any:
    """
    Superset grammar: raw control characters inside strings, then JSON5
    (unquoted keys, single-quoted strings, trailing commas, comments).
    """
    try:
        return json.loads(text, strict=False)
    except ValueError:
        return json5.loads(text)


def parse_heuristic(text: str) -> Any:
    """
    Programmatic repair followed by a relaxed parse.

    Single quotes become double quotes only when the candidate has no
    double-quoted string at all but does have single-quoted ones.
    """
    fixed = text
    if not DOUBLE_QUOTED_RE.search(text) and SINGLE_QUOTED_RE.search(text):
        fixed = SINGLE_QUOTED_RE.sub(r'"\1"', fixed)
    fixed = BARE_KEY_RE.sub(r'\1"\2"\3', fixed)
    return parse_relaxed(fixed)


def parse_inner_object(text: str) -> Any:
    """Parse the innermost object containing both "question" and "options" keys."""
    match = INNER_QUESTION_RE.search(text)
    if not match:
        return None
    return json5.loads(match.group(0))


def extract_fields(text: str) -> Optional[dict[str, Any]]:
    """
    Capture question fields independently with regular expressions.

    Succeeds only if both question and options are found. Missing
    correctAnswer defaults to 0, missing explanation to "".
    """
    question_match = QUESTION_BEFORE_OPTIONS_RE.search(text) or QUESTION_FIELD_RE.search(text)
    options_match = OPTIONS_FIELD_RE.search(text)
    if not (question_match and options_match):
        return None

    options = []
    for chunk in OPTION_SPLIT_RE.split(options_match.group(1)):
        option = chunk.strip().removeprefix('"').removesuffix('"').strip()
        if option:
            options.append(_unescape(option))
    options = options[:MAX_FIELD_OPTIONS]

    correct_match = CORRECT_FIELD_RE.search(text)
    explanation_match = EXPLANATION_FIELD_RE.search(text)

    return {
        "question": _unescape(question_match.group(1).strip()),
        "options": options,
        "correctAnswer": int(correct_match.group(1)) if correct_match else 0,
        "explanation": _unescape(explanation_match.group(1).strip()) if explanation_match else "",
    }


LAYERS: tuple[tuple[ParseLayer, Callable[[str], Any]], ...] = (
    (ParseLayer.STRICT, parse_strict),
    (ParseLayer.RELAXED, parse_relaxed),
    (ParseLayer.HEURISTIC, parse_heuristic),
    (ParseLayer.SALVAGE, parse_inner_object),
    (ParseLayer.FIELDS, extract_fields),
)


def parse_layered(text: str, *, preview_chars: int = 100) -> LayeredParse:
    """
    Run the recovery layers in order and return the first success.

    A layer succeeds when it returns an object (or an array containing
    one). Exceptions inside a layer only advance the chain.

    Args:
        text: Balanced candidate text
        preview_chars: Characters of text kept on the raised error

    Returns:
        LayeredParse with the payload and the winning layer

    Raises:
        UnparseableInputError: If all recovery strategies are exhausted
    """
    for layer, parse in LAYERS:
        try:
            payload = _as_payload(parse(text))
        except LAYER_ERRORS as e:
            logger.debug(f"Layer {layer} failed: {e}")
            continue
        if payload is None:
            logger.debug(f"Layer {layer} produced no object")
            continue
        if layer is not ParseLayer.STRICT:
            logger.info(f"Recovered payload with {layer} layer")
        return LayeredParse(payload=payload, layer=layer)

    raise UnparseableInputError(
        "All recovery strategies exhausted: unable to extract a question object",
        preview=text[:preview_chars],
    )
