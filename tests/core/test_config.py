"""
Unit Tests for RecoveryConfig
"""

import dataclasses

import pytest

from quizgen_toolkit.core.config import DEFAULT_CONFIG, RecoveryConfig


class TestRecoveryConfig:
    """Tests for RecoveryConfig defaults and validation."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.min_options == 4
        assert DEFAULT_CONFIG.max_options == 5
        assert DEFAULT_CONFIG.min_text_length == 3
        assert DEFAULT_CONFIG.unwrap_max_depth == 5
        assert DEFAULT_CONFIG.strict_answer_resolution is False

    def test_config_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.max_options = 6

    @pytest.mark.parametrize("bounds", [(0, 5), (5, 4)])
    def test_config_when_option_bounds_invalid_then_raises(self, bounds):
        with pytest.raises(ValueError, match="Invalid option bounds"):
            RecoveryConfig(min_options=bounds[0], max_options=bounds[1])

    def test_config_when_negative_depth_then_raises(self):
        with pytest.raises(ValueError, match="unwrap_max_depth"):
            RecoveryConfig(unwrap_max_depth=-1)
