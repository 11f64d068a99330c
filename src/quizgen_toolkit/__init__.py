"""Top-level package for the quiz generation toolkit.

Provides subpackages:
- quizgen_toolkit.core – question model, validator and post-processing
- quizgen_toolkit.recovery – resilient parsing of raw LLM output into questions
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("quizgen_toolkit")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from .core.models import CanonicalQuestion, JsonCandidate
from .core.schemas import (
    ValidationError,
    check_question,
    postprocess_question,
    validate_question,
)
from .recovery import (
    DEFAULT_CONFIG,
    ParseLayer,
    QuestionRecoveryError,
    RecoveryConfig,
    RecoveryResult,
    RecoveryStatus,
    SchemaInvalidError,
    UnparseableInputError,
    parse_question,
    parse_question_or_fallback,
    recover_question,
)

__all__: list[str] = [
    "__version__",
    "CanonicalQuestion",
    "JsonCandidate",
    "ValidationError",
    "check_question",
    "postprocess_question",
    "validate_question",
    "DEFAULT_CONFIG",
    "ParseLayer",
    "QuestionRecoveryError",
    "RecoveryConfig",
    "RecoveryResult",
    "RecoveryStatus",
    "SchemaInvalidError",
    "UnparseableInputError",
    "parse_question",
    "parse_question_or_fallback",
    "recover_question",
]
