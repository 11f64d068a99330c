"""
Module: recovery.candidates

Purpose:
    Locate the JSON value inside a chatty model response and patch up
    truncated output.

Key Functions:
    - extract_candidate(): First balanced {...} or [...] region
    - salvage_question_region(): Regex salvage of a "question" object
    - locate_candidate_region(): Extractor with salvage fallbacks
    - balance_braces(): Append missing closers by simple counting

Dependencies:
    - re (std)
    - quizgen_toolkit.core.models.JsonCandidate

Used By:
    - recovery.pipeline: Between desugaring and layered parsing
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from quizgen_toolkit.core.models import JsonCandidate

logger = logging.getLogger(__name__)

# Greedy: runs to the last "}" so a nested payload is kept whole
SALVAGE_RE = re.compile(r'\{[^{}]*"question"[\s\S]*\}')


def _first_opener(text: str) -> int:
    """Index of the earliest "{" or "[", or -1."""
    starts = [i for i in (text.find("{"), text.find("[")) if i != -1]
    return min(starts) if starts else -1


def extract_candidate(text: str) -> Optional[JsonCandidate]:
    """
    Find the first balanced JSON object or array in text.

    Scans from the earliest "{" or "[" tracking nesting depth of that
    delimiter and string-literal state. Escaped characters are skipped.

    Args:
        text: Normalized response text

    Returns:
        Balanced JsonCandidate, or None if there is no opening delimiter
        or the value is truncated (depth never returns to zero)

    Example:
        >>> extract_candidate('Sure! {"a": "}"} Hope that helps').text
        '{"a": "}"}'
    """
    start = _first_opener(text)
    if start == -1:
        return None

    opener = text[start]
    closer = "}" if opener == "{" else "]"
    depth = 0
    in_string = False
    escape = False

    for i in range(start, len(text)):
        ch = text[i]
        if escape:
            escape = False
            continue
        if ch == "\\":
            escape = True
            continue
        if ch == '"':
            in_string = not in_string
        if in_string:
            continue
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
        if depth == 0:
            return JsonCandidate(text=text[start:i + 1], start=start, opener=opener)

    return None


def salvage_question_region(text: str) -> Optional[JsonCandidate]:
    """
    Regex salvage for truncated output: a "{" followed by a "question" key.

    Returns:
        Unbalanced-flagged JsonCandidate for the matched region, or None
    """
    match = SALVAGE_RE.search(text)
    if not match:
        return None
    return JsonCandidate(text=match.group(0), start=match.start(), opener="{", balanced=False)


def locate_candidate_region(text: str) -> Optional[JsonCandidate]:
    """
    Pick the region of text handed to the layered parser.

    Order:
        1. Balanced candidate from extract_candidate()
        2. Regex-salvaged "question" object
        3. Everything from the first opening delimiter to end-of-text

    Returns:
        JsonCandidate, or None if text has no "{" or "[" at all
    """
    candidate = extract_candidate(text)
    if candidate is not None:
        return candidate

    candidate = salvage_question_region(text)
    if candidate is not None:
        logger.debug(f"Using salvaged question region at offset {candidate.start}")
        return candidate

    start = _first_opener(text)
    if start == -1:
        return None
    logger.debug(f"Using truncated tail from offset {start}")
    return JsonCandidate(text=text[start:], start=start, opener=text[start], balanced=False)


def balance_braces(text: str) -> str:
    """
    Append closing brackets and braces for truncated JSON.

    Counts are global, not nesting-aware: missing "]" are appended first,
    then missing "}". Already balanced (or over-closed) text gains nothing.

    Example:
        >>> balance_braces('{"options": ["a", "b"')
        '{"options": ["a", "b"]}'
    """
    missing_brackets = text.count("[") - text.count("]")
    missing_braces = text.count("{") - text.count("}")
    return text + "]" * max(missing_brackets, 0) + "}" * max(missing_braces, 0)
