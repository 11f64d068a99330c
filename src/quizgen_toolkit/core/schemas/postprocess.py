"""
Question Post-Processing

Tidies optional fields of a question record so that a structurally sound
question is not rejected over cosmetic issues: blank passages, placeholder
images, and images the model forgot to describe.

Never raises; returns a new dict and leaves the input untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..config import DEFAULT_CONFIG, RecoveryConfig

logger = logging.getLogger(__name__)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def is_placeholder_image(url: str, *, config: RecoveryConfig = DEFAULT_CONFIG) -> bool:
    """Return True if the URL points at a placeholder rather than a real image."""
    return any(marker in url for marker in config.placeholder_markers)


def postprocess_question(
    record: Any,
    *,
    config: RecoveryConfig = DEFAULT_CONFIG,
) -> Any:
    """
    Normalize optional passage/image fields of a question record.

    Rules:
        - Drop passage if absent or blank
        - Drop image and imageDescription together if image is empty
        - Drop both if the image URL is a placeholder
        - Synthesize a description for a kept image that lacks one
        - Drop an imageDescription left without an image

    Args:
        record: Question dict (non-mappings are returned unchanged)
        config: Placeholder markers and fallback description

    Returns:
        New dict with optional fields tidied

    Example:
        >>> postprocess_question({"question": "Q", "image": "https://via.placeholder.com/300"})
        {'question': 'Q'}
    """
    if not isinstance(record, Mapping):
        return record

    question = dict(record)

    if _is_blank(question.get("passage")):
        question.pop("passage", None)

    image = question.get("image")
    if _is_blank(image):
        question.pop("image", None)
        question.pop("imageDescription", None)
    elif isinstance(image, str):
        image_url = image.strip()
        if is_placeholder_image(image_url, config=config):
            logger.debug(f"Dropping placeholder image: {image_url}")
            question.pop("image", None)
            question.pop("imageDescription", None)
        else:
            question["image"] = image_url
            description = question.get("imageDescription")
            if not isinstance(description, str) or not description.strip():
                question["imageDescription"] = config.fallback_image_description
    else:
        question.pop("image", None)

    if "imageDescription" in question and "image" not in question:
        question.pop("imageDescription")

    return question
