"""
Module: recovery.text

Purpose:
    Surface-noise cleanup applied to raw model output before any JSON
    handling: byte-order marks, zero-width characters, typographic
    quotes/dashes and Markdown code fences.

Key Functions:
    - normalize_text(): Full surface cleanup
    - strip_code_fences(): Remove ```json / ``` markers

Used By:
    - recovery.pipeline: First stage of recovery
"""

from __future__ import annotations

import re

BOM = "\uFEFF"
ZERO_WIDTH_RE = re.compile("[\u200B-\u200D\u2060]")

# Typographic characters -> ASCII
SMART_CHAR_MAP = str.maketrans({
    "\u2018": "'",
    "\u2019": "'",
    "\u201C": '"',
    "\u201D": '"',
    "\u2013": "-",
    "\u2014": "-",
})

FENCE_OPEN_RE = re.compile(r"```json\s*", re.IGNORECASE)
FENCE_RE = re.compile(r"```\s*")


def strip_code_fences(text: str) -> str:
    """
    Remove Markdown code fence markers, keeping their content.

    Example:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}\\n'
    """
    text = FENCE_OPEN_RE.sub("", text)
    return FENCE_RE.sub("", text)


def normalize_quotes(text: str) -> str:
    """Replace curly quotes and en/em dashes with ASCII equivalents."""
    return text.translate(SMART_CHAR_MAP)


def strip_invisible(text: str) -> str:
    """Remove byte-order marks and zero-width characters."""
    return ZERO_WIDTH_RE.sub("", text.replace(BOM, ""))


def normalize_text(text: str) -> str:
    """
    Clean surface noise from raw model output.

    Never fails; empty input yields empty output.

    Args:
        text: Raw response text

    Returns:
        Trimmed text without BOM, zero-width characters, smart quotes
        or code fences
    """
    if not text:
        return ""
    text = strip_invisible(text.strip())
    text = normalize_quotes(text)
    return strip_code_fences(text).strip()
