"""Bounded momentum oscillator (RSI-style, simple-average smoothing).

Unlike Wilder's RSI, average gain and average loss are plain means over
the last ``length`` price changes, recomputed for every position.
"""

import logging
from typing import Sequence

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from indicator_core.models.converters import series_times, series_values
from indicator_core.models.reading import Insufficient, Reading, Value, resolve
from indicator_core.models.series import PricePoint

logger = logging.getLogger(__name__)

# Legacy value reported for warm-up positions
RSI_SENTINEL = 50.0
RSI_MAX = 100.0


def _rsi_from_averages(avg_gain: np.ndarray, avg_loss: np.ndarray) -> np.ndarray:
    """Map average gain/loss pairs to the 0-100 scale.

    RSI = 100 - 100 / (1 + avg_gain / avg_loss). Without losses the
    oscillator saturates at 100, and a window without any movement
    reads neutral.
    """
    rsi = np.full(len(avg_gain), RSI_MAX, dtype=np.float64)
    has_loss = avg_loss > 0
    rs = avg_gain[has_loss] / avg_loss[has_loss]
    rsi[has_loss] = 100.0 - 100.0 / (1.0 + rs)
    rsi[(avg_loss == 0) & (avg_gain == 0)] = RSI_SENTINEL
    return np.clip(rsi, 0.0, RSI_MAX)


def rsi_readings(prices: Sequence[PricePoint], length: int = 14) -> list[Reading]:
    """
    Calculate the oscillator as tagged readings.

    Position 0 has no prior change and positions ``i < length`` have fewer
    than ``length`` changes; both are ``Insufficient``.

    Args:
        prices: Price series ordered by time
        length: Number of price changes averaged

    Returns:
        Tagged readings aligned with ``prices``
    """
    if length < 1:
        raise ValueError(f"window length must be >= 1, got {length}")
    times = series_times(prices)
    values = series_values(prices)
    n = len(values)

    readings: list[Reading] = [Insufficient(time=t) for t in times[:length]]
    if n <= length:
        return readings[:n]

    deltas = np.diff(values)
    gains = np.maximum(deltas, 0.0)
    losses = np.maximum(-deltas, 0.0)

    # Window k covers deltas[k : k + length], i.e. the changes ending at
    # price index k + length
    avg_gain = sliding_window_view(gains, length).mean(axis=1)
    avg_loss = sliding_window_view(losses, length).mean(axis=1)
    rsi = _rsi_from_averages(avg_gain, avg_loss)

    readings.extend(
        Value(time=times[k + length], value=float(v)) for k, v in enumerate(rsi)
    )
    logger.debug("Oscillator: %d points, window %d", n, length)
    return readings


def compute_rsi(prices: Sequence[PricePoint], length: int = 14) -> list[PricePoint]:
    """
    Calculate the oscillator with the legacy 50 sentinel during warm-up.

    Args:
        prices: Price series ordered by time
        length: Number of price changes averaged

    Returns:
        List of oscillator points in [0, 100] (same length as input)
    """
    return resolve(rsi_readings(prices, length), RSI_SENTINEL)
