"""Tests for the typist simulation."""

import random

import pytest

from engine.simulation import (
    DEFAULT_TEXTS,
    SimulatedClock,
    calculate_summary,
    simulate,
)

TEXT = DEFAULT_TEXTS[0]


class TestSimulatedClock:
    """Test SimulatedClock class."""

    def test_advance(self):
        clock = SimulatedClock()
        clock.advance(1.5)
        assert clock() == 1.5

    def test_negative_advance_ignored(self):
        clock = SimulatedClock(10.0)
        clock.advance(-3.0)
        assert clock() == 10.0


class TestSimulate:
    """Test simulate function."""

    def test_perfect_typist(self):
        """Ten characters per second is two words per second (120 WPM)."""
        result = simulate(TEXT, 2.0, 60, 0.0, rng=random.Random(1))
        assert result.total_errors == 0
        assert result.accuracy == 1.0
        assert result.actual_wps == pytest.approx(2.0)
        assert result.wpm == pytest.approx(120.0)
        assert result.text == TEXT

    def test_every_keystroke_wrong(self):
        result = simulate(TEXT, 2.0, 60, 1.0, rng=random.Random(1))
        assert result.total_errors == len(TEXT)
        assert result.accuracy == 0.0
        assert result.wpm == 0.0

    def test_corrected_errors(self):
        result = simulate(TEXT, 2.0, 60, 1.0, correct_errors=True, rng=random.Random(1))
        assert result.total_errors == len(TEXT)
        assert 0.4 < result.accuracy < 0.5
        assert result.wpm > 0.0

    def test_time_limit(self):
        result = simulate(TEXT, 2.0, 1, 0.0, rng=random.Random(1))
        assert result.elapsed_time_ms == 1000

    def test_jitter_keeps_speed_close(self):
        result = simulate(TEXT, 2.0, 60, 0.0, jitter=0.3, rng=random.Random(3))
        assert result.actual_wps == pytest.approx(2.0, rel=0.2)

    @pytest.mark.parametrize("wps,error_rate", [(0.0, 0.1), (-1.0, 0.1), (2.0, 1.5), (2.0, -0.1)])
    def test_invalid_arguments(self, wps, error_rate):
        with pytest.raises(ValueError):
            simulate(TEXT, wps, 30, error_rate)


class TestCalculateSummary:
    """Test calculate_summary function."""

    def test_empty(self):
        summary = calculate_summary([])
        assert summary.total_iterations == 0
        assert summary.results == []

    def test_aggregates(self):
        rng = random.Random(9)
        results = [
            simulate(TEXT, wps, 60, 0.0, iteration=i, rng=rng)
            for i, wps in enumerate([1.0, 2.0, 3.0])
        ]
        summary = calculate_summary(results)
        assert summary.total_iterations == 3
        assert summary.average_wps == pytest.approx(2.0)
        assert summary.min_wps == pytest.approx(1.0)
        assert summary.max_wps == pytest.approx(3.0)
        assert summary.average_accuracy == 1.0
        assert [r.iteration for r in summary.results] == [0, 1, 2]
