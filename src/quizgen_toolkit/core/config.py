"""
Module: core.config

Purpose:
    Immutable tunables shared by the recovery pipeline, the validator and
    the post-processor. Field alias tables are NOT configuration; they live
    as constants in recovery.normalizer.

Key Classes:
    - RecoveryConfig: Thresholds, placeholder markers, answer policy

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - core.schemas.validator: Option count and text length bounds
    - core.schemas.postprocess: Placeholder markers, fallback description
    - recovery.normalizer: Unwrap depth, answer policy
    - recovery.pipeline: Log previews
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RecoveryConfig:
    """
    Configuration for question recovery and validation.

    Attributes:
        min_options: Fewest options an accepted question may have (default 4)
        max_options: Most options kept and accepted (default 5)
        min_text_length: Minimum trimmed length of question/explanation (default 3)
        unwrap_max_depth: Recursion cap when searching wrapper objects (default 5)
        fallback_image_description: Text synthesized for images lacking one
        placeholder_markers: Substrings marking an image URL as not real
        strict_answer_resolution: If True, an unresolvable correct answer
            becomes -1 (rejected by the validator) instead of 0
        log_preview_chars: Characters of raw input quoted in log messages
    """
    min_options: int = 4
    max_options: int = 5
    min_text_length: int = 3
    unwrap_max_depth: int = 5
    fallback_image_description: str = "Chart or graph related to the question"
    placeholder_markers: tuple[str, ...] = ("via.placeholder.com", "placeholder")
    strict_answer_resolution: bool = False
    log_preview_chars: int = 100

    def __post_init__(self) -> None:
        if self.min_options < 1 or self.max_options < self.min_options:
            raise ValueError(
                f"Invalid option bounds: {self.min_options}-{self.max_options}"
            )
        if self.unwrap_max_depth < 0:
            raise ValueError(f"unwrap_max_depth must be >= 0: {self.unwrap_max_depth}")


DEFAULT_CONFIG = RecoveryConfig()
