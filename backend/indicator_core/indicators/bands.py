"""Standard-deviation envelopes around a rolling mean."""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from indicator_core.indicators.rolling import rolling_mean_std
from indicator_core.models.converters import points_from_values, series_times, series_values
from indicator_core.models.series import PricePoint


@dataclass
class Bands:
    """Five aligned envelope series at -2, -1, 0, +1, +2 standard deviations."""

    upper_band2: list[PricePoint]
    upper_band1: list[PricePoint]
    mean_line: list[PricePoint]
    lower_band1: list[PricePoint]
    lower_band2: list[PricePoint]

    def as_dict(self) -> dict[str, list[PricePoint]]:
        return {
            "upper_band2": self.upper_band2,
            "upper_band1": self.upper_band1,
            "mean_line": self.mean_line,
            "lower_band1": self.lower_band1,
            "lower_band2": self.lower_band2,
        }

    def __len__(self) -> int:
        return len(self.mean_line)


def compute_bands(mean: Sequence[PricePoint], std: Sequence[PricePoint]) -> Bands:
    """
    Build envelope bands from a mean/std pair.

    upper_band2 = mean + 2 * std
    upper_band1 = mean + std
    mean_line   = mean
    lower_band1 = mean - std
    lower_band2 = mean - 2 * std

    Args:
        mean: Mean series
        std: Standard deviation series (aligned with ``mean``, values >= 0)

    Returns:
        Bands aligned with ``mean``
    """
    if len(mean) != len(std):
        raise ValueError(f"mean/std length mismatch: {len(mean)} != {len(std)}")
    times = series_times(mean)
    m = series_values(mean)
    s = series_values(std)

    return Bands(
        upper_band2=points_from_values(times, m + 2.0 * s),
        upper_band1=points_from_values(times, m + s),
        mean_line=points_from_values(times, m),
        lower_band1=points_from_values(times, m - s),
        lower_band2=points_from_values(times, m - 2.0 * s),
    )


def compute_price_bands(prices: Sequence[PricePoint], length: int = 250) -> Bands:
    """
    Build price-space bands from the rolling mean/std of the price series.

    During warm-up the mean is the raw price and the std is 0, so all five
    bands collapse onto the price.

    Args:
        prices: Price series ordered by time
        length: Rolling window length

    Returns:
        Bands in price units, aligned with ``prices``
    """
    mean, std = rolling_mean_std(prices, length)
    return compute_bands(mean, std)


def compute_z_score_bands(z_score: Sequence[PricePoint]) -> Bands:
    """Flat z-space bands (mean 0, std 1) on the timestamps of ``z_score``."""
    times = series_times(z_score)
    n = len(times)
    return compute_bands(
        points_from_values(times, np.zeros(n)),
        points_from_values(times, np.ones(n)),
    )
