"""Tests for WPM calculator utilities."""

import pytest

from engine.wpm_calculator import (
    calculate_accuracy,
    calculate_consistency,
    calculate_progress,
    calculate_wpm,
)


class TestCalculateWPM:
    """Test calculate_wpm function."""

    def test_basic_wpm_calculation(self):
        """Test basic WPM calculation.

        100 keystrokes in 30 seconds:
        - words = 100 / 5 = 20 words
        - minutes = 30 / 60 = 0.5 minutes
        - WPM = 20 / 0.5 = 40 WPM
        """
        wpm = calculate_wpm(100, 30000)
        assert abs(wpm - 40.0) < 0.1

    def test_zero_duration(self):
        """Test WPM calculation with zero duration returns 0."""
        assert calculate_wpm(100, 0) == 0.0

    def test_negative_duration(self):
        """Test WPM calculation with negative duration returns 0."""
        assert calculate_wpm(100, -5) == 0.0

    def test_zero_keystrokes(self):
        """Test WPM calculation with zero keystrokes returns 0."""
        assert calculate_wpm(0, 30000) == 0.0

    def test_one_minute_exact(self):
        """Test WPM calculation for exactly one minute.

        250 keystrokes (50 words) in 60 seconds = 50 WPM.
        """
        wpm = calculate_wpm(250, 60000)
        assert abs(wpm - 50.0) < 0.1

    def test_high_wpm(self):
        """500 keystrokes (100 words) in 30 seconds = 200 WPM."""
        wpm = calculate_wpm(500, 30000)
        assert abs(wpm - 200.0) < 0.1


class TestCalculateAccuracy:
    """Test calculate_accuracy function."""

    def test_perfect_accuracy(self):
        assert calculate_accuracy(10, 10) == 1.0

    def test_partial_accuracy(self):
        assert calculate_accuracy(9, 12) == pytest.approx(0.75)

    def test_nothing_typed(self):
        """Test accuracy is 0 instead of dividing by zero."""
        assert calculate_accuracy(0, 0) == 0.0


class TestCalculateConsistency:
    """Test calculate_consistency function."""

    def test_no_samples(self):
        """Test that short tests are not penalized."""
        assert calculate_consistency([]) == 100.0

    def test_single_sample(self):
        assert calculate_consistency([60.0]) == 100.0

    def test_constant_speed(self):
        assert calculate_consistency([60.0, 60.0, 60.0]) == pytest.approx(100.0)

    def test_variable_speed(self):
        """Samples 40 and 60: mean 50, stddev 10, consistency 80."""
        assert calculate_consistency([40.0, 60.0]) == pytest.approx(80.0)

    def test_clamped_to_zero(self):
        """Test that very erratic speeds never go below 0."""
        assert calculate_consistency([0.0, 0.0, 0.0, 300.0]) == 0.0

    def test_zero_mean(self):
        assert calculate_consistency([0.0, 0.0]) == 0.0


class TestCalculateProgress:
    """Test calculate_progress function."""

    def test_halfway(self):
        assert calculate_progress(5, 10) == 0.5

    def test_capped(self):
        assert calculate_progress(15, 10) == 1.0

    def test_empty_total(self):
        assert calculate_progress(0, 0) == 1.0
