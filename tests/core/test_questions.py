"""
Unit Tests for CanonicalQuestion Model

Tests for construction-time invariants and serialization.
"""

import pytest

from quizgen_toolkit.core.models.candidates import JsonCandidate
from quizgen_toolkit.core.models.questions import CanonicalQuestion


class TestCanonicalQuestion:
    """Tests for CanonicalQuestion dataclass."""

    @pytest.fixture
    def kwargs(self) -> dict:
        return dict(
            question="What is 2 + 2?",
            options=("3", "4", "5", "6"),
            correct_answer=1,
            explanation="Two plus two is four.",
        )

    def test_init_when_valid_data_then_creates_question(self, kwargs):
        """Valid data should create a question."""
        q = CanonicalQuestion(**kwargs)
        assert q.correct_option == "4"
        assert q.passage is None

    def test_init_when_three_options_then_raises_error(self, kwargs):
        """Fewer than four options should raise ValueError."""
        kwargs["options"] = ("3", "4", "5")
        with pytest.raises(ValueError, match="options must have 4-5 entries"):
            CanonicalQuestion(**kwargs)

    def test_init_when_answer_equals_option_count_then_raises_error(self, kwargs):
        """correct_answer == len(options) is out of range."""
        kwargs["correct_answer"] = 4
        with pytest.raises(ValueError, match="out of range"):
            CanonicalQuestion(**kwargs)

    def test_init_when_answer_is_bool_then_raises_error(self, kwargs):
        """Booleans are not accepted as indices."""
        kwargs["correct_answer"] = True
        with pytest.raises(ValueError, match="must be an integer"):
            CanonicalQuestion(**kwargs)

    def test_init_when_image_without_description_then_raises_error(self, kwargs):
        """An image must come with a description."""
        with pytest.raises(ValueError, match="image requires"):
            CanonicalQuestion(**kwargs, image="https://example.com/chart.png")

    def test_init_when_description_without_image_then_raises_error(self, kwargs):
        """A description without an image is rejected."""
        with pytest.raises(ValueError, match="without image"):
            CanonicalQuestion(**kwargs, image_description="A bar chart")

    @pytest.mark.parametrize(
        "field,value",
        [("passage", 12), ("image", ["https://example.com/a.png"]), ("image_description", 7)],
    )
    def test_init_when_optional_field_not_string_then_raises_error(self, kwargs, field, value):
        """Non-string optional fields raise ValueError, not AttributeError."""
        kwargs[field] = value
        with pytest.raises(ValueError, match=f"{field} must be a string"):
            CanonicalQuestion(**kwargs)

    def test_from_dict_when_passage_not_string_then_raises_error(self, kwargs):
        """from_dict on a caller's dict stays within its documented errors."""
        data = CanonicalQuestion(**kwargs).to_dict()
        data["passage"] = 12
        with pytest.raises(ValueError, match="passage must be a string"):
            CanonicalQuestion.from_dict(data)

    def test_equality_is_structural(self, kwargs):
        """Two questions with the same fields are equal."""
        assert CanonicalQuestion(**kwargs) == CanonicalQuestion(**kwargs)

    def test_frozen_when_assigning_then_raises_error(self, kwargs):
        """Questions cannot be mutated after creation."""
        q = CanonicalQuestion(**kwargs)
        with pytest.raises(AttributeError):
            q.question = "Changed?"  # type: ignore[misc]

    def test_to_dict_when_optional_absent_then_omitted(self, kwargs):
        """Absent optional fields do not appear in the dict."""
        d = CanonicalQuestion(**kwargs).to_dict()
        assert set(d) == {"question", "options", "correctAnswer", "explanation"}
        assert d["options"] == ["3", "4", "5", "6"]

    def test_from_dict_when_to_dict_output_then_equal(self, kwargs):
        """from_dict(to_dict()) rebuilds an equal question."""
        q = CanonicalQuestion(
            **kwargs,
            passage="Read carefully.",
            image="https://example.com/chart.png",
            image_description="A bar chart of sales",
        )
        assert CanonicalQuestion.from_dict(q.to_dict()) == q


class TestJsonCandidate:
    """Tests for JsonCandidate dataclass."""

    def test_closer_matches_opener(self):
        assert JsonCandidate(text="[1]", start=0, opener="[").closer == "]"
        assert JsonCandidate(text="{}", start=3, opener="{").end == 5

    def test_init_when_bad_opener_then_raises_error(self):
        with pytest.raises(ValueError, match="opener"):
            JsonCandidate(text="(x)", start=0, opener="(")
