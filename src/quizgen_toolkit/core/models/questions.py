"""
Module: questions

Purpose:
    Provides the CanonicalQuestion dataclass - the single normalized shape
    every successful recovery converges to. Immutable, validated on
    construction, compared structurally.

Key Functions:
    - CanonicalQuestion.correct_option: Text of the correct option
    - CanonicalQuestion.to_dict() / CanonicalQuestion.from_dict(): Serialization

Dependencies:
    - dataclasses (std)

Used By:
    - recovery.pipeline: Builds instances from accepted payloads
    - core.schemas.validator: Shares the invariants checked here

Invariants:
    The same invariants the validator enforces on plain dicts. A
    CanonicalQuestion that exists is always a valid question; there is no
    way to build a partially-populated one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CanonicalQuestion:
    """
    Accepted multiple-choice question (immutable).

    Attributes:
        question: Question stem, at least 3 characters after trimming
        options: Answer options, 4-5 non-blank strings
        correct_answer: Zero-based index into options
        explanation: Why the correct answer is correct, at least 3 characters
        passage: Optional reading passage (None when absent)
        image: Optional image URL (None when absent)
        image_description: Description of image; present iff image is present

    Example:
        >>> q = CanonicalQuestion(
        ...     question="What is 2 + 2?",
        ...     options=("3", "4", "5", "6"),
        ...     correct_answer=1,
        ...     explanation="Two plus two is four.",
        ... )
        >>> q.correct_option
        '4'
    """

    question: str
    options: tuple[str, ...]
    correct_answer: int
    explanation: str
    passage: Optional[str] = None
    image: Optional[str] = None
    image_description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate question on construction."""
        if not isinstance(self.question, str) or len(self.question.strip()) < 3:
            raise ValueError(f"question must have at least 3 characters: {self.question!r}")

        if not (4 <= len(self.options) <= 5):
            raise ValueError(f"options must have 4-5 entries: {len(self.options)}")
        for option in self.options:
            if not isinstance(option, str) or not option.strip():
                raise ValueError(f"options must be non-blank strings: {option!r}")

        if isinstance(self.correct_answer, bool) or not isinstance(self.correct_answer, int):
            raise ValueError(f"correct_answer must be an integer: {self.correct_answer!r}")
        if not (0 <= self.correct_answer < len(self.options)):
            raise ValueError(
                f"correct_answer out of range 0-{len(self.options) - 1}: {self.correct_answer}"
            )

        if not isinstance(self.explanation, str) or len(self.explanation.strip()) < 3:
            raise ValueError(f"explanation must have at least 3 characters: {self.explanation!r}")

        for name in ("passage", "image", "image_description"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string: {value!r}")

        if self.passage is not None and not self.passage.strip():
            raise ValueError("passage must be omitted rather than blank")

        # image and image_description travel together
        if self.image is not None:
            if not self.image.strip():
                raise ValueError("image must be omitted rather than blank")
            if self.image_description is None or len(self.image_description.strip()) < 3:
                raise ValueError("image requires an image_description of at least 3 characters")
        elif self.image_description is not None:
            raise ValueError("image_description given without image")

    @property
    def correct_option(self) -> str:
        """Text of the correct option."""
        return self.options[self.correct_answer]

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize to the wire shape (camelCase keys).

        Optional fields are omitted entirely when absent.

        Returns:
            Dict representation
        """
        d: dict[str, Any] = {
            "question": self.question,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "explanation": self.explanation,
        }
        if self.passage is not None:
            d["passage"] = self.passage
        if self.image is not None:
            d["image"] = self.image
            d["imageDescription"] = self.image_description
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CanonicalQuestion:
        """
        Deserialize from the wire shape.

        Args:
            data: Dict with camelCase keys, as produced by to_dict()

        Returns:
            CanonicalQuestion instance

        Raises:
            KeyError: If a required field is missing
            ValueError: If the data violates an invariant
        """
        return cls(
            question=data["question"],
            options=tuple(data["options"]),
            correct_answer=data["correctAnswer"],
            explanation=data["explanation"],
            passage=data.get("passage"),
            image=data.get("image"),
            image_description=data.get("imageDescription"),
        )

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        stem = self.question if len(self.question) <= 40 else self.question[:37] + "..."
        return (
            f"CanonicalQuestion({stem!r}, options={len(self.options)}, "
            f"correct={self.correct_answer})"
        )
