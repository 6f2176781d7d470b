"""Rolling mean, population standard deviation and Z-score.

Each position ``i >= length - 1`` is computed from the window
``prices[i - length + 1 : i + 1]``; positions before that have no full
window and are reported as insufficient.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from indicator_core.models.converters import points_from_values, series_times, series_values
from indicator_core.models.reading import Insufficient, Reading, Value, resolve
from indicator_core.models.series import PricePoint

logger = logging.getLogger(__name__)

# Legacy value reported for warm-up positions
Z_SCORE_SENTINEL = 0.0


def _check_length(length: int) -> None:
    if length < 1:
        raise ValueError(f"window length must be >= 1, got {length}")


def _window_mean_std(values: np.ndarray, length: int) -> tuple[np.ndarray, np.ndarray]:
    """Mean and population std of every full window.

    Returns arrays of ``len(values) - length + 1`` entries, the k-th one
    describing the window that ends at index ``k + length - 1``.
    """
    if len(values) < length:
        empty = np.empty(0, dtype=np.float64)
        return empty, empty
    windows = sliding_window_view(values, length)
    # ddof=0: population variance, divisor = length
    std = windows.std(axis=1, ddof=0)
    # A flat window has zero dispersion even when its mean is not exact
    std[np.ptp(windows, axis=1) == 0] = 0.0
    return windows.mean(axis=1), std


@dataclass
class RollingStatistics:
    """Rolling statistics of a price series, aligned with the input.

    Attributes:
        mean: Rolling mean (raw price during warm-up).
        std: Rolling population std (0 during warm-up).
        z_score: Z-score with the legacy 0 sentinel during warm-up.
        readings: Tagged Z-score readings (``Insufficient`` during warm-up).
    """

    mean: list[PricePoint]
    std: list[PricePoint]
    z_score: list[PricePoint]
    readings: list[Reading]

    def __len__(self) -> int:
        return len(self.readings)


def compute_rolling_statistics(
    prices: Sequence[PricePoint],
    length: int,
) -> RollingStatistics:
    """
    Calculate rolling mean, population std and Z-score.

    Z = (price - mean) / std over the trailing window, or 0 when the
    window has zero dispersion.

    Args:
        prices: Price series ordered by time
        length: Window length (>= 1)

    Returns:
        RollingStatistics with every series aligned to ``prices``
    """
    _check_length(length)
    times = series_times(prices)
    values = series_values(prices)
    n = len(values)

    mean = values.copy()
    std = np.zeros(n, dtype=np.float64)
    z = np.zeros(n, dtype=np.float64)

    window_mean, window_std = _window_mean_std(values, length)
    if len(window_mean):
        start = length - 1
        mean[start:] = window_mean
        std[start:] = window_std
        np.divide(
            values[start:] - window_mean,
            window_std,
            out=z[start:],
            where=window_std > 0,
        )

    readings: list[Reading] = [
        Insufficient(time=t) if i < length - 1 else Value(time=t, value=float(z[i]))
        for i, t in enumerate(times)
    ]

    logger.debug(
        "Rolling stats: %d points, window %d, %d insufficient",
        n,
        length,
        min(n, length - 1),
    )

    return RollingStatistics(
        mean=points_from_values(times, mean),
        std=points_from_values(times, std),
        z_score=resolve(readings, Z_SCORE_SENTINEL),
        readings=readings,
    )


def z_score_readings(prices: Sequence[PricePoint], length: int) -> list[Reading]:
    """Z-score as tagged readings (warm-up positions are ``Insufficient``)."""
    return compute_rolling_statistics(prices, length).readings


def compute_z_score(prices: Sequence[PricePoint], length: int = 250) -> list[PricePoint]:
    """
    Calculate the rolling Z-score of a price series.

    Args:
        prices: Price series ordered by time
        length: Window length

    Returns:
        List of Z-score points (same length as input, 0 for warm-up values)
    """
    return compute_rolling_statistics(prices, length).z_score


def rolling_mean_std(
    prices: Sequence[PricePoint],
    length: int,
) -> tuple[list[PricePoint], list[PricePoint]]:
    """Rolling mean and population std of a price series."""
    stats = compute_rolling_statistics(prices, length)
    return stats.mean, stats.std
