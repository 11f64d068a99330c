"""
Unit Tests for the Layered Parser

Each test targets the layer expected to win for a given kind of damage.
"""

import json

import pytest

from quizgen_toolkit.recovery.errors import UnparseableInputError
from quizgen_toolkit.recovery.layers import (
    ParseLayer,
    extract_fields,
    parse_heuristic,
    parse_inner_object,
    parse_layered,
)


class TestParseLayered:
    """Tests for parse_layered ordering and outcomes."""

    def test_parse_when_strict_json_then_strict_layer(self, valid_record_json, valid_record):
        result = parse_layered(valid_record_json)
        assert result.layer is ParseLayer.STRICT
        assert result.payload == valid_record

    def test_parse_when_raw_newline_in_string_then_relaxed_layer(self):
        result = parse_layered('{"question": "Line one\nline two"}')
        assert result.layer is ParseLayer.RELAXED
        assert result.payload["question"] == "Line one\nline two"

    def test_parse_when_single_quotes_and_bare_keys_then_relaxed_layer(self):
        result = parse_layered("{question: 'What is 2+2?', options: ['1', '2', '3', '4'], correctAnswer: 3,}")
        assert result.layer is ParseLayer.RELAXED
        assert result.payload["options"] == ["1", "2", "3", "4"]

    def test_parse_when_array_then_first_object(self):
        result = parse_layered('[1, {"question": "Q"}, {"question": "R"}]')
        assert result.payload == {"question": "Q"}

    def test_parse_when_outer_object_broken_then_salvage_layer(self):
        text = (
            '{"meta": oops, "item": {"question": "Capital of France?", '
            '"options": ["Paris", "Rome", "Oslo", "Bern"], "correctAnswer": 0, '
            '"explanation": "Paris is the capital."}}'
        )
        result = parse_layered(text)
        assert result.layer is ParseLayer.SALVAGE
        assert result.payload["options"][0] == "Paris"

    def test_parse_when_unescaped_inner_quotes_then_fields_layer(self):
        text = (
            '{"question": "What does "ephemeral" mean?", '
            '"options": ["Short-lived", "Eternal", "Heavy", "Bright"], '
            '"correctAnswer": 2, "explanation": "It means lasting a short time."}'
        )
        result = parse_layered(text)
        assert result.layer is ParseLayer.FIELDS
        assert result.payload == {
            "question": 'What does "ephemeral" mean?',
            "options": ["Short-lived", "Eternal", "Heavy", "Bright"],
            "correctAnswer": 2,
            "explanation": "It means lasting a short time.",
        }

    @pytest.mark.parametrize("text", ["Sorry, I cannot help with that.", "42", '"just a string"', "[1, 2]", ""])
    def test_parse_when_no_object_then_raises_exhausted(self, text):
        with pytest.raises(UnparseableInputError, match="All recovery strategies exhausted"):
            parse_layered(text)


class TestIndividualLayers:
    """Direct tests of the repair layers."""

    def test_heuristic_when_only_single_quotes_then_converted(self):
        assert parse_heuristic("{question: 'Q', n: 1}") == {"question": "Q", "n": 1}

    def test_inner_object_when_absent_then_none(self):
        assert parse_inner_object('{"prompt": "Q"}') is None

    def test_fields_when_options_missing_then_none(self):
        assert extract_fields('{"question": "Q", "explanation": "E"}') is None

    def test_fields_when_optional_fields_missing_then_defaults(self):
        payload = extract_fields('{"question": "Q?", "options": ["a", "b"]')
        assert payload == {"question": "Q?", "options": ["a", "b"], "correctAnswer": 0, "explanation": ""}

    def test_fields_when_more_than_five_options_then_capped(self):
        options = json.dumps(["a", "b", "c", "d", "e", "f", "g"])
        payload = extract_fields('{"question": "Q?", "options": ' + options + "}")
        assert payload["options"] == ["a", "b", "c", "d", "e"]

    def test_fields_when_escapes_in_capture_then_decoded(self):
        payload = extract_fields(r'{"question": "Tab\there", "options": ["xA"]')
        assert payload["question"] == "Tab\there"
        assert payload["options"] == ["xA"]
