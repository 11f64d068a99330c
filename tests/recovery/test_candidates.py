"""
Unit Tests for Candidate Extraction and Brace Balancing
"""

import pytest

from quizgen_toolkit.recovery.candidates import (
    balance_braces,
    extract_candidate,
    locate_candidate_region,
    salvage_question_region,
)


class TestExtractCandidate:
    """Tests for extract_candidate function."""

    def test_extract_when_leading_prose_then_object_only(self):
        text = 'Here is your question:\n{"question": "Q", "options": []}\nGood luck!'
        candidate = extract_candidate(text)
        assert candidate.text == '{"question": "Q", "options": []}'
        assert candidate.start == text.index("{")
        assert candidate.opener == "{"
        assert candidate.balanced is True

    def test_extract_when_array_first_then_array(self):
        candidate = extract_candidate('Result: [{"a": 1}, {"b": 2}] done')
        assert candidate.text == '[{"a": 1}, {"b": 2}]'
        assert candidate.closer == "]"

    def test_extract_when_brace_inside_string_then_ignored(self):
        candidate = extract_candidate('{"a": "}{", "b": 1} tail}')
        assert candidate.text == '{"a": "}{", "b": 1}'

    def test_extract_when_escaped_quote_inside_string_then_ignored(self):
        candidate = extract_candidate(r'{"a": "say \"}\" now"} x')
        assert candidate.text == r'{"a": "say \"}\" now"}'

    def test_extract_when_nested_then_outermost(self):
        candidate = extract_candidate('{"data": {"question": "Q"}}')
        assert candidate.text == '{"data": {"question": "Q"}}'

    def test_extract_when_no_delimiter_then_none(self):
        assert extract_candidate("I cannot produce a question right now.") is None

    def test_extract_when_truncated_then_none(self):
        assert extract_candidate('{"question": "Q", "options": ["A"') is None


class TestLocateCandidateRegion:
    """Tests for the salvage fallbacks."""

    def test_locate_when_truncated_wrapper_then_salvages_question_object(self):
        text = '{"data": {"question": "Q", "options": ["A"], "correctAnswer": 0}'
        candidate = locate_candidate_region(text)
        assert candidate.text == '{"question": "Q", "options": ["A"], "correctAnswer": 0}'
        assert candidate.balanced is False

    def test_locate_when_truncated_without_closer_then_tail(self):
        text = 'Sure: {"question": "Q", "options": ["A", "B"'
        candidate = locate_candidate_region(text)
        assert candidate.text == '{"question": "Q", "options": ["A", "B"'
        assert candidate.start == 6
        assert candidate.balanced is False

    def test_locate_when_no_delimiter_then_none(self):
        assert locate_candidate_region("no json here") is None

    def test_salvage_when_no_question_key_then_none(self):
        assert salvage_question_region('{"prompt": "Q"}') is None


class TestBalanceBraces:
    """Tests for balance_braces function."""

    def test_balance_when_missing_final_brace_then_appended(self):
        text = '{"question":"Q","options":["A","B","C","D"],"correctAnswer":0,"explanation":"E"'
        assert balance_braces(text) == text + "}"

    def test_balance_when_truncated_in_array_then_bracket_before_brace(self):
        assert balance_braces('{"options": ["a", "b"') == '{"options": ["a", "b"]}'

    @pytest.mark.parametrize("text", ['{"a": [1]}', "[]", "plain", '{"a": "}"}}'])
    def test_balance_when_balanced_or_over_closed_then_unchanged(self, text):
        assert balance_braces(text) == text

    def test_balance_is_idempotent(self):
        once = balance_braces('{"a": {"b": [1, [2')
        assert balance_braces(once) == once
