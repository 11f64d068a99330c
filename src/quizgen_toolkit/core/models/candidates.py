"""
Module: candidates

Purpose:
    Provides the JsonCandidate dataclass - a substring of a raw response
    believed to delimit one JSON value.

Used By:
    - recovery.candidates: Produced by the candidate extractor
    - recovery.pipeline: Fed (after balancing) to the layered parser
"""

from __future__ import annotations

from dataclasses import dataclass

DELIMITER_PAIRS = {"{": "}", "[": "]"}


@dataclass(frozen=True)
class JsonCandidate:
    """
    Candidate JSON region (immutable).

    Attributes:
        text: The candidate substring
        start: Offset of the opening delimiter in the scanned text
        opener: "{" or "["
        balanced: True if scanning found the matching close delimiter
            before end-of-string
    """

    text: str
    start: int
    opener: str
    balanced: bool = True

    def __post_init__(self) -> None:
        if self.opener not in DELIMITER_PAIRS:
            raise ValueError(f"opener must be '{{' or '[': {self.opener!r}")
        if self.start < 0:
            raise ValueError(f"start must be non-negative: {self.start}")

    @property
    def closer(self) -> str:
        """Closing delimiter matching opener."""
        return DELIMITER_PAIRS[self.opener]

    @property
    def end(self) -> int:
        """Offset one past the last character of the candidate."""
        return self.start + len(self.text)
