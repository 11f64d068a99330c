"""
Module: recovery.math_text

Purpose:
    Rewrite LaTeX-like constructs and Unicode math symbols into plain
    English so they cannot corrupt JSON string escaping, and scrub the
    characters that make strict JSON parsing fail (stray backslashes,
    control characters, trailing commas).

Key Functions:
    - desugar_math(): Idempotent plain-English rewrite, never raises

Used By:
    - recovery.pipeline: Applied to normalized text before extraction
    - recovery.normalizer: Re-applied to parsed field values
"""

from __future__ import annotations

import logging
import re

from .text import normalize_quotes

logger = logging.getLogger(__name__)

FENCE_RE = re.compile(r"```[a-z]*\n?|```", re.IGNORECASE)
INLINE_MATH_RE = re.compile(r"\$([^$]*)\$")
FRAC_RE = re.compile(r"\\{1,2}frac\{([^}]*)\}\{([^}]*)\}")
SQRT_RE = re.compile(r"\\{1,2}sqrt\{([^}]*)\}")

# LaTeX operators; surrounding blanks are absorbed so "12 \times 8" -> "12 times 8"
LATEX_WORDS = (
    (re.compile(r"[ \t]*\\{1,2}times[ \t]*"), " times "),
    (re.compile(r"[ \t]*\\{1,2}cdot[ \t]*"), " dot "),
    (re.compile(r"[ \t]*\\{1,2}pm[ \t]*"), " plus/minus "),
)

SYMBOL_WORDS = {
    "×": "times",
    "⋅": "dot",
    "÷": "divided by",
    "±": "plus/minus",
    "≈": "approximately",
    "≤": "less than or equal to",
    "≥": "greater than or equal to",
    "≠": "not equal to",
    "∑": "sum",
    "√": "sqrt",
    "π": "pi",
    "∞": "infinity",
}
SYMBOL_RE = re.compile(r"[ \t]*([" + "".join(SYMBOL_WORDS) + r"])[ \t]*")

# A backslash followed by a legal JSON escape is kept whole; any other is dropped
BACKSLASH_RE = re.compile(r'\\(["\\/bfnrt]|u[0-9a-fA-F]{4})?')

# Code <= 31 except tab, LF, CR; plus DEL
CONTROL_CHAR_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")
TRAILING_COMMA_RE = re.compile(r"(?:,\s*)+(?=[}\]])")


def _keep_legal_escape(match: re.Match) -> str:
    return match.group(0) if match.group(1) else ""


def _unwrap_nested(text: str) -> str:
    """Rewrite \\frac and \\sqrt, one match per sweep, until none are left."""
    while True:
        updated = SQRT_RE.sub(r"sqrt(\1)", FRAC_RE.sub(r"(\1)/(\2)", text))
        if updated == text:
            return text
        text = updated


def _desugar_once(text: str) -> str:
    text = FENCE_RE.sub("", text)
    text = INLINE_MATH_RE.sub(r"\1", text)
    text = _unwrap_nested(text)
    for pattern, word in LATEX_WORDS:
        text = pattern.sub(word, text)
    text = SYMBOL_RE.sub(lambda m: f" {SYMBOL_WORDS[m.group(1)]} ", text)
    text = BACKSLASH_RE.sub(_keep_legal_escape, text)
    text = normalize_quotes(text)
    text = CONTROL_CHAR_RE.sub(" ", text)
    return TRAILING_COMMA_RE.sub("", text)


def desugar_math(text: str) -> str:
    """
    Rewrite math notation into plain English and scrub JSON-hostile characters.

    Rewrites, in order: code fences, $...$ wrappers, \\frac{A}{B} -> (A)/(B),
    \\sqrt{A} -> sqrt(A), \\times / \\cdot / \\pm and Unicode math symbols to
    words, stray backslashes (deleted), typographic quotes/dashes, control
    characters (-> space) and trailing commas before } or ].

    The rewrite is repeated until it reaches a fixed point, so
    desugar_math(desugar_math(s)) == desugar_math(s).

    Args:
        text: Any string; non-strings are returned unchanged

    Returns:
        Desugared text, or the input unchanged if rewriting fails

    Example:
        >>> desugar_math("$12 \\\\times 8 = 96$")
        '12 times 8 = 96'
    """
    if not isinstance(text, str):
        return text
    try:
        # Every rewrite consumes a marker (backslash, $, symbol, comma), so this ends
        current = text
        while True:
            updated = _desugar_once(current)
            if updated == current:
                return current
            current = updated
    except Exception as e:
        logger.debug(f"Math desugaring failed, keeping input: {e}")
        return text
