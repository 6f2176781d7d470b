"""Mock spread chart data for the signal detail view.

Produces a normalized price pair, their log spread, an OU-smoothed Z-score
of the spread and flat +/-2 sigma bands, for signals stored without price
history. All randomness goes through an injected ``RandomSource``.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from indicator_core.models.converters import points_from_values, series_times, series_values
from indicator_core.models.series import PricePoint
from indicator_core.synthetic.generator import Clock, RandomSource, seeded_source

logger = logging.getLogger(__name__)

BAR_INTERVAL_SECONDS = 900

# Amplitude of the uniform noise added by the correlated leg and the OU step
CORRELATION_NOISE = 0.1
OU_NOISE = 0.1


@dataclass
class SignalChartData:
    """Series for one spread chart, all aligned on the same timestamps."""

    normalized_price_a: list[PricePoint]
    normalized_price_b: list[PricePoint]
    spread: list[PricePoint]
    upper_band: list[PricePoint]
    lower_band: list[PricePoint]
    mean_line: list[PricePoint]
    z_score: list[PricePoint]
    spread_mean: float
    spread_std: float


def generate_mock_prices(
    base_price: float,
    volatility: float,
    num_points: int = 100,
    random_source: RandomSource | None = None,
    start_time: int | None = None,
    interval: int = BAR_INTERVAL_SECONDS,
    clock: Clock = time.time,
) -> list[PricePoint]:
    """
    Random walk with additive steps, floored at half the base price.

    Args:
        base_price: Starting price
        volatility: Step size as a fraction of ``base_price``
        num_points: Number of points
        random_source: Uniform [0, 1) source
        start_time: Unix time of the first point (defaults to now - num_points bars)
        interval: Seconds between points
        clock: Wall clock used when no start time is given

    Returns:
        List of PricePoints
    """
    rnd = random_source or seeded_source()
    if start_time is None:
        start_time = int(clock()) - num_points * interval

    floor = base_price * 0.5
    price = base_price
    points: list[PricePoint] = []
    for i in range(num_points):
        change = (rnd() - 0.5) * volatility * base_price
        price = max(price + change, floor)
        points.append(PricePoint(time=start_time + i * interval, value=price))
    return points


def generate_correlated_prices(
    prices_a: Sequence[PricePoint],
    correlation: float,
    beta: float,
    base_ratio: float = 1.0,
    random_source: RandomSource | None = None,
) -> list[PricePoint]:
    """
    Derive a second leg from ``prices_a`` with noise shrinking as correlation grows.

    value_b = a * beta * base_ratio + a * noise, with
    noise = (1 - correlation) * uniform(-0.05, 0.05)
    """
    rnd = random_source or seeded_source()
    out: list[PricePoint] = []
    for p in prices_a:
        noise = (1 - correlation) * (rnd() - 0.5) * CORRELATION_NOISE
        out.append(PricePoint(time=p.time, value=p.value * beta * base_ratio + p.value * noise))
    return out


def normalize_prices(series: Sequence[PricePoint]) -> list[PricePoint]:
    """Percent change of every point from the first value."""
    if not series:
        return []
    first = series[0].value
    if first == 0:
        raise ValueError("cannot normalize a series starting at 0")
    return [PricePoint(time=p.time, value=(p.value - first) / first * 100) for p in series]


def compute_spread(
    prices_a: Sequence[PricePoint],
    prices_b: Sequence[PricePoint],
    beta: float,
) -> list[PricePoint]:
    """Log spread ln(a) - beta * ln(b), keyed on the times of ``prices_a``."""
    if len(prices_a) != len(prices_b):
        raise ValueError(f"leg length mismatch: {len(prices_a)} != {len(prices_b)}")
    a = series_values(prices_a)
    b = series_values(prices_b)
    return points_from_values(series_times(prices_a), np.log(a) - beta * np.log(b))


def smoothed_z_score(
    spread: Sequence[PricePoint],
    half_life: float = 20,
    random_source: RandomSource | None = None,
) -> tuple[list[PricePoint], float, float]:
    """
    Full-sample Z-score of the spread, smoothed with Ornstein-Uhlenbeck dynamics.

    z_t = z_{t-1} + theta * (raw_z_t - z_{t-1}) + noise, theta = ln(2) / half_life

    Args:
        spread: Spread series
        half_life: Mean-reversion half-life in bars (> 0)
        random_source: Uniform [0, 1) source for the noise term

    Returns:
        Tuple of (z-score series, spread mean, spread population std)
    """
    if half_life <= 0:
        raise ValueError(f"half_life must be positive, got {half_life}")
    if not spread:
        return [], 0.0, 0.0
    rnd = random_source or seeded_source()

    values = series_values(spread)
    mean = float(values.mean())
    # Flat spreads have zero dispersion even when the mean is not exact
    std = 0.0 if np.ptp(values) == 0 else float(values.std())
    theta = math.log(2) / half_life

    z = 0.0
    out: list[PricePoint] = []
    for p in spread:
        raw = (p.value - mean) / std if std > 0 else 0.0
        z = z + theta * (raw - z) + (rnd() - 0.5) * OU_NOISE
        out.append(PricePoint(time=p.time, value=z))
    return out, mean, std


def constant_band(
    times: Sequence[int],
    mean: float,
    std: float,
    multiplier: float,
) -> list[PricePoint]:
    """Flat line at mean + multiplier * std."""
    level = mean + multiplier * std
    return [PricePoint(time=t, value=level) for t in times]


def generate_signal_chart_data(
    base_price_a: float,
    base_price_b: float,
    correlation: float,
    beta: float,
    half_life: float = 20,
    num_points: int = 100,
    random_source: RandomSource | None = None,
    start_time: int | None = None,
    clock: Clock = time.time,
) -> SignalChartData:
    """
    Build a complete mock spread chart for one signal.

    Args:
        base_price_a: Entry price of leg A (> 0)
        base_price_b: Entry price of leg B (> 0)
        correlation: Pair correlation (noise shrinks as it approaches 1)
        beta: Hedge ratio (> 0)
        half_life: Mean-reversion half-life in bars
        num_points: Number of bars
        random_source: Uniform [0, 1) source shared by every step
        start_time: Unix time of the first bar
        clock: Wall clock used when no start time is given

    Returns:
        SignalChartData
    """
    if base_price_a <= 0 or base_price_b <= 0:
        raise ValueError(
            f"base prices must be positive, got {base_price_a} and {base_price_b}"
        )
    if beta <= 0:
        raise ValueError(f"beta must be positive, got {beta}")
    rnd = random_source or seeded_source()

    prices_a = generate_mock_prices(
        base_price_a, 0.02, num_points, rnd, start_time, clock=clock
    )
    prices_b = generate_correlated_prices(
        prices_a, correlation, 1 / beta, base_price_b / base_price_a, rnd
    )

    spread = compute_spread(prices_a, prices_b, beta)
    z_score, mean, std = smoothed_z_score(spread, half_life, rnd)

    times = series_times(spread)
    logger.debug(
        "Mock chart: %d points, spread mean=%.4f std=%.4f", num_points, mean, std
    )
    return SignalChartData(
        normalized_price_a=normalize_prices(prices_a),
        normalized_price_b=normalize_prices(prices_b),
        spread=spread,
        upper_band=constant_band(times, mean, std, 2),
        lower_band=constant_band(times, mean, std, -2),
        mean_line=constant_band(times, mean, std, 0),
        z_score=z_score,
        spread_mean=mean,
        spread_std=std,
    )
