"""Tests for rolling mean/std and Z-score."""

import math

import numpy as np
import pytest

from indicator_core.indicators import (
    compute_rolling_statistics,
    compute_z_score,
    rolling_mean_std,
    z_score_readings,
)
from indicator_core.models import Insufficient, PricePoint, Value


def _points(values, start: int = 1_700_000_000, step: int = 900) -> list[PricePoint]:
    """Create a line series from raw values."""
    return [PricePoint(time=start + i * step, value=float(v)) for i, v in enumerate(values)]


def _random_walk(n: int, seed: int = 7) -> list[PricePoint]:
    rng = np.random.default_rng(seed)
    return _points(100 + np.cumsum(rng.normal(0, 1, n)))


class TestZScore:
    """Tests for Z-score calculation."""

    def test_output_aligned_with_input(self):
        """Test output has the input's length and timestamps."""
        prices = _random_walk(120)
        result = compute_z_score(prices, 20)

        assert len(result) == len(prices)
        assert [p.time for p in result] == [p.time for p in prices]

    def test_warmup_is_zero(self):
        """Test positions without a full window read exactly 0."""
        prices = _random_walk(50)
        result = compute_z_score(prices, 10)

        assert all(p.value == 0 for p in result[:9])
        assert result[9].value != 0

    def test_basic_value(self):
        """Test Z-score against a hand computation."""
        # window [1, 2, 3]: mean 2, population variance 2/3
        result = compute_z_score(_points([1, 2, 3, 4, 5]), 3)

        assert result[2].value == pytest.approx(1 / math.sqrt(2 / 3))
        assert result[3].value == pytest.approx(1 / math.sqrt(2 / 3))

    def test_constant_series_is_zero(self):
        """Test zero dispersion is guarded to 0."""
        result = compute_z_score(_points([100] * 50), 10)

        assert all(p.value == 0 for p in result)

    @pytest.mark.parametrize("level", [2 / 3, 80 / 30, 0.1, 1.1])
    def test_flat_inexact_level_is_zero(self, level):
        """Test flat windows read 0 even when the level is not exactly representable."""
        prices = _points([level] * 50)
        result = compute_z_score(prices, 10)
        _, std = rolling_mean_std(prices, 10)

        assert {p.value for p in result} == {0.0}
        assert {p.value for p in std} == {0.0}

    def test_scale_invariance(self):
        """Test scaling prices by a positive constant leaves Z unchanged."""
        prices = _random_walk(80)
        scaled = [PricePoint(time=p.time, value=p.value * 3.5) for p in prices]

        z = compute_z_score(prices, 15)
        z_scaled = compute_z_score(scaled, 15)

        for a, b in zip(z, z_scaled):
            assert b.value == pytest.approx(a.value, rel=1e-9, abs=1e-9)

    def test_window_of_one(self):
        """Test a window of one has zero std and therefore zero Z."""
        result = compute_z_score(_points([1, 5, 2, 8]), 1)

        assert [p.value for p in result] == [0.0, 0.0, 0.0, 0.0]

    def test_insufficient_data(self):
        """Test series shorter than the window."""
        result = compute_z_score(_points([1, 2, 3]), 10)

        assert len(result) == 3
        assert all(p.value == 0 for p in result)

    def test_empty_input(self):
        """Test empty input gives empty output."""
        assert compute_z_score([], 5) == []

    def test_invalid_length(self):
        """Test non-positive window is rejected."""
        with pytest.raises(ValueError, match="window length"):
            compute_z_score(_points([1, 2, 3]), 0)


class TestRollingStatistics:
    """Tests for rolling mean and population std."""

    def test_warmup_defaults(self):
        """Test warm-up mean is the raw price and std is 0."""
        prices = _points([10, 11, 12, 13, 14])
        mean, std = rolling_mean_std(prices, 3)

        assert [p.value for p in mean[:2]] == [10.0, 11.0]
        assert [p.value for p in std[:2]] == [0.0, 0.0]

    def test_population_std(self):
        """Test std uses divisor L, not L - 1."""
        mean, std = rolling_mean_std(_points([2, 4, 4, 4, 5, 5, 7, 9]), 8)

        # Classic example: population std = 2, sample std = 2.138
        assert mean[-1].value == pytest.approx(5.0)
        assert std[-1].value == pytest.approx(2.0)

    def test_rolling_mean_moves_with_window(self):
        """Test mean at each index covers only the trailing window."""
        mean, _ = rolling_mean_std(_points([1, 2, 3, 4, 5, 6]), 3)

        assert [p.value for p in mean[2:]] == pytest.approx([2.0, 3.0, 4.0, 5.0])

    def test_statistics_length(self):
        """Test all series share the input length."""
        stats = compute_rolling_statistics(_random_walk(40), 10)

        assert len(stats) == 40
        assert len(stats.mean) == len(stats.std) == len(stats.z_score) == 40


class TestZScoreReadings:
    """Tests for tagged Z-score readings."""

    def test_warmup_tagged_insufficient(self):
        """Test warm-up positions are Insufficient, the rest are Value."""
        readings = z_score_readings(_random_walk(30), 10)

        assert all(isinstance(r, Insufficient) for r in readings[:9])
        assert all(isinstance(r, Value) for r in readings[9:])

    def test_zero_std_is_a_measured_value(self):
        """Test a flat full window is a genuine 0, not insufficient."""
        readings = z_score_readings(_points([100] * 12), 10)

        assert readings[9] == Value(time=readings[9].time, value=0.0)

    def test_readings_match_legacy_series(self):
        """Test the legacy series substitutes 0 only for Insufficient."""
        prices = _random_walk(30)
        stats = compute_rolling_statistics(prices, 10)

        for reading, point in zip(stats.readings, stats.z_score):
            assert reading.time == point.time
            if isinstance(reading, Value):
                assert point.value == reading.value
            else:
                assert point.value == 0
