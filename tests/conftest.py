import json
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import quizgen_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())


# Common test fixtures
@pytest.fixture
def valid_record() -> dict:
    """Return a question record that passes validation."""
    return {
        "question": "Which word best completes the sentence?",
        "options": ["methodical", "careless", "rushed", "biased"],
        "correctAnswer": 0,
        "explanation": "Methodical means systematic and orderly.",
    }


@pytest.fixture
def valid_record_json(valid_record) -> str:
    """Return the valid record serialized as strict JSON."""
    return json.dumps(valid_record)
