"""
Unit tests for backend/core/one_rep_max.py

Tests cover:
- Epley formula values
- Single-rep identity and zero handling
- Sanitizing of dirty input
"""
import math

import pytest

from backend.core.one_rep_max import (
    clean_reps,
    clean_weight,
    estimate_one_rep_max,
    rounded_one_rep_max,
)


@pytest.mark.unit
class TestEstimateOneRepMax:
    """Tests for the Epley 1RM estimate."""

    def test_five_reps(self):
        """100 x 5 -> 100 * (1 + 5/30) ~= 116.67."""
        result = estimate_one_rep_max(100, 5)
        assert result == pytest.approx(100 * (1 + 5 / 30))
        assert round(result, 2) == 116.67

    def test_ten_reps(self):
        assert estimate_one_rep_max(80, 10) == pytest.approx(80 * (1 + 10 / 30))

    @pytest.mark.parametrize("weight", [0, 1, 20, 82.5, 140, 317.5])
    def test_single_rep_returns_weight(self, weight):
        """1 rep means the weight IS the 1RM."""
        assert estimate_one_rep_max(weight, 1) == weight

    def test_zero_reps_returns_zero(self):
        assert estimate_one_rep_max(225, 0) == 0.0

    def test_zero_weight_returns_zero(self):
        assert estimate_one_rep_max(0, 12) == 0.0

    def test_non_decreasing_in_reps(self):
        """For a fixed weight, more reps never lowers the estimate."""
        scores = [estimate_one_rep_max(60, reps) for reps in range(0, 31)]
        assert scores == sorted(scores)

    def test_full_precision(self):
        """No rounding: 100 x 10 is 133.333..., not 133."""
        assert estimate_one_rep_max(100, 10) != 133.0
        assert estimate_one_rep_max(100, 10) == pytest.approx(133.3333333)

    @pytest.mark.parametrize("weight,reps", [
        (-50, 5),
        (50, -5),
        (float("nan"), 5),
        (50, float("nan")),
        (float("inf"), 5),
        ("", 5),
        (None, 5),
        ("abc", "def"),
    ])
    def test_dirty_input_scores_zero(self, weight, reps):
        """Malformed values are treated as 0 instead of raising."""
        assert estimate_one_rep_max(weight, reps) == 0.0

    def test_numeric_strings_are_accepted(self):
        assert estimate_one_rep_max("100", "1") == 100.0


@pytest.mark.unit
class TestRoundedOneRepMax:
    """Tests for the display rounding helper."""

    def test_rounds_to_whole_units(self):
        assert rounded_one_rep_max(100, 10) == 133.0

    def test_rounds_to_requested_digits(self):
        assert rounded_one_rep_max(100, 5, ndigits=2) == 116.67


@pytest.mark.unit
class TestCleaners:
    """Tests for input sanitizing."""

    def test_clean_weight_keeps_valid(self):
        assert clean_weight(82.5) == 82.5

    def test_clean_weight_rejects_nan(self):
        assert clean_weight(math.nan) == 0.0

    def test_clean_reps_truncates_floats(self):
        assert clean_reps(8.7) == 8

    def test_clean_reps_rejects_bool(self):
        assert clean_reps(True) == 0
