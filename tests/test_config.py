"""Tests for the config module.

Tests option dataclasses, level presets and result sizing:
- CompressionLevel enum
- SlimOptions, LogOptions
- SlimResult, reduction_ratio
"""

import pytest

from promptslim.config import (
    DEFAULT_PRESERVE_KEYS,
    CompressionLevel,
    LogOptions,
    SlimOptions,
    SlimResult,
    reduction_ratio,
)
from promptslim.exceptions import ConfigurationError


class TestCompressionLevel:
    """Tests for CompressionLevel enum."""

    def test_enum_values(self):
        """All expected enum values exist with correct string values."""
        assert CompressionLevel.LOW.value == "low"
        assert CompressionLevel.MEDIUM.value == "medium"
        assert CompressionLevel.AGGRESSIVE.value == "aggressive"

    def test_string_conversion(self):
        """Levels are str enums and round-trip from their value."""
        assert CompressionLevel("aggressive") is CompressionLevel.AGGRESSIVE
        assert CompressionLevel.LOW == "low"


class TestSlimOptions:
    """Tests for SlimOptions."""

    def test_presets(self):
        """Each level has its own sample bound."""
        assert SlimOptions.for_level("low").max_array_samples == 5
        assert SlimOptions.for_level("medium").max_array_samples == 3
        assert SlimOptions.for_level(CompressionLevel.AGGRESSIVE).max_array_samples == 2

    def test_default_preserve_keys(self):
        """Presets preserve the usual identifying keys."""
        assert SlimOptions.for_level("low").preserve_keys == set(DEFAULT_PRESERVE_KEYS)

    def test_string_level_is_coerced(self):
        """A string level becomes a CompressionLevel."""
        assert SlimOptions(compression_level="low").compression_level is CompressionLevel.LOW

    def test_invalid_level(self):
        """Unknown levels raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            SlimOptions(compression_level="extreme")
        assert "valid_levels" in exc_info.value.details

    def test_max_samples_must_be_positive(self):
        """max_array_samples below 1 is rejected."""
        with pytest.raises(ConfigurationError):
            SlimOptions(max_array_samples=0)

    def test_preserve_keys_not_shared(self):
        """Default sets are independent per instance."""
        first = SlimOptions()
        first.preserve_keys.add("extra")
        assert "extra" not in SlimOptions().preserve_keys


class TestLogOptions:
    """Tests for LogOptions."""

    def test_presets(self):
        """Each level has its own stack depth."""
        assert LogOptions.for_level("low").max_stack_depth == 10
        assert LogOptions.for_level("medium").max_stack_depth == 6
        assert LogOptions.for_level("aggressive").max_stack_depth == 3

    def test_zero_depth_allowed(self):
        """A depth of zero is valid."""
        assert LogOptions(max_stack_depth=0).max_stack_depth == 0

    def test_negative_depth_rejected(self):
        """Negative depths raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            LogOptions(max_stack_depth=-1)


class TestSlimResult:
    """Tests for SlimResult and reduction_ratio."""

    def test_zero_original_is_zero_ratio(self):
        """An empty original gives 0, not a division error."""
        assert reduction_ratio(0, 0) == 0.0
        assert reduction_ratio(0, 5) == 0.0

    def test_ratio_can_be_negative(self):
        """Growth gives a negative ratio."""
        assert reduction_ratio(10, 15) == -0.5

    def test_from_texts(self):
        """from_texts sizes both texts with the estimator."""
        result = SlimResult.from_texts("a" * 35, "a" * 7)
        assert result.original_size == 10
        assert result.transformed_size == 2
        assert result.reduction_ratio == pytest.approx(0.8)
        assert result.tokens_saved == 8

    def test_tokens_saved_never_negative(self):
        """Growth saves zero tokens."""
        assert SlimResult.from_texts("a", "a" * 100).tokens_saved == 0
