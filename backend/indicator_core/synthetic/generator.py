"""Correlated two-asset synthetic series.

Used by the chart views when no real feed is wired in. Randomness comes
from an injected zero-argument callable returning uniform floats in
[0, 1); two generators built with the same seed (or the same source
sequence) produce identical output.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

import numpy as np

from indicator_core.models.config import SyntheticConfig
from indicator_core.models.series import OHLCBar, PricePoint, SyntheticPair

logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]
Clock = Callable[[], float]


def seeded_source(seed: int | None = None) -> RandomSource:
    """Uniform [0, 1) source backed by a private numpy Generator."""
    return np.random.default_rng(seed).random


def ratio_bar(a: OHLCBar, b: OHLCBar) -> OHLCBar:
    """
    Divide bar ``a`` by bar ``b`` corner by corner.

    The quotient of two valid bars is not necessarily a valid bar (a.high/b.high
    can fall below a.close/b.close), so high and low are taken as the extremes
    of all four divided corners.

    Args:
        a: Numerator bar
        b: Denominator bar (positive prices)

    Returns:
        Ratio bar with the time of ``a``
    """
    o = a.open / b.open
    h = a.high / b.high
    l = a.low / b.low
    c = a.close / b.close
    return OHLCBar(time=a.time, open=o, high=max(o, h, l, c), low=min(o, h, l, c), close=c)


class SyntheticSeriesGenerator:
    """Generate correlated OHLC legs, their ratio, and ratio line series.

    Each instance owns its random source; instances never share state.
    """

    def __init__(
        self,
        config: SyntheticConfig | None = None,
        random_source: RandomSource | None = None,
        seed: int | None = None,
        clock: Clock = time.time,
    ):
        """
        Args:
            config: Generator parameters (defaults used when omitted)
            random_source: Uniform [0, 1) source; overrides ``seed``
            seed: Seed for a private numpy Generator (falls back to config.seed)
            clock: Wall clock used to place the last bar when no end time is given
        """
        self.config = config or SyntheticConfig()
        if random_source is None:
            random_source = seeded_source(seed if seed is not None else self.config.seed)
        self._random = random_source
        self._clock = clock

    # --------- helpers ---------
    def _shock(self, volatility: float, scale: float = 1.0) -> float:
        """Centered uniform move in [-volatility/2, volatility/2) * scale."""
        return (self._random() - 0.5) * volatility * scale

    def _widen(self, volatility: float) -> float:
        return self._random() * volatility * self.config.wick_scale

    def _timestamps(self, num_points: int, end_time: int | None) -> list[int]:
        interval = self.config.bar_interval_seconds
        if end_time is None:
            end_time = int(self._clock()) // interval * interval
        start = end_time - num_points * interval
        return [start + i * interval for i in range(num_points)]

    def _bar(self, t: int, open_: float, move: float, volatility: float) -> OHLCBar:
        close = open_ * (1 + move)
        widen_high = self._widen(volatility)
        widen_low = self._widen(volatility)
        return OHLCBar(
            time=t,
            open=open_,
            high=max(open_, close) * (1 + widen_high),
            low=min(open_, close) * (1 - widen_low),
            close=close,
        )

    @staticmethod
    def _check_inputs(
        price_a: float, price_b: float, num_points: int, volatility: float
    ) -> None:
        if price_a <= 0 or price_b <= 0:
            raise ValueError(f"anchor prices must be positive, got {price_a} and {price_b}")
        if num_points < 0:
            raise ValueError(f"num_points must be >= 0, got {num_points}")
        if volatility < 0:
            raise ValueError(f"volatility must be >= 0, got {volatility}")

    # --------- public API ---------
    def generate_pair_ohlc(
        self,
        price_a: float,
        price_b: float,
        num_points: int = 300,
        volatility: float | None = None,
        end_time: int | None = None,
    ) -> SyntheticPair:
        """
        Generate two correlated OHLC legs and their ratio series.

        Leg A moves by a centered random shock; leg B moves by
        ``correlation * move_a`` plus idiosyncratic noise. Each bar opens at
        the previous close (the first at the anchor price) and gets
        independent upper and lower wicks.

        Args:
            price_a: Anchor price of leg A (> 0)
            price_b: Anchor price of leg B (> 0)
            num_points: Number of bars
            volatility: Per-bar volatility (defaults to config.volatility)
            end_time: Unix time the series ends at (defaults to now, floored
                to the bar interval)

        Returns:
            SyntheticPair with three aligned bar series
        """
        vol = self.config.volatility if volatility is None else volatility
        self._check_inputs(price_a, price_b, num_points, vol)
        corr = self.config.correlation

        bars_a: list[OHLCBar] = []
        bars_b: list[OHLCBar] = []
        ratio: list[OHLCBar] = []

        open_a, open_b = float(price_a), float(price_b)
        for t in self._timestamps(num_points, end_time):
            move_a = self._shock(vol)
            bar_a = self._bar(t, open_a, move_a, vol)

            move_b = corr * move_a + self._shock(vol, self.config.idiosyncratic_scale)
            bar_b = self._bar(t, open_b, move_b, vol)

            bars_a.append(bar_a)
            bars_b.append(bar_b)
            ratio.append(ratio_bar(bar_a, bar_b))

            open_a, open_b = bar_a.close, bar_b.close

        logger.debug(
            "Generated %d synthetic bars (A=%.4f, B=%.4f, vol=%.4f, corr=%.2f)",
            num_points,
            price_a,
            price_b,
            vol,
            corr,
        )
        return SyntheticPair(bars_a=bars_a, bars_b=bars_b, ratio=ratio)

    def generate_pair_prices(
        self,
        price_a: float,
        price_b: float,
        num_points: int = 250,
        volatility: float | None = None,
        end_time: int | None = None,
    ) -> list[PricePoint]:
        """
        Generate a ratio line series from two correlated random walks.

        Both legs share a common move and add their own idiosyncratic move
        each step; the series value is ``leg_a / leg_b``.

        Args:
            price_a: Anchor price of leg A (> 0)
            price_b: Anchor price of leg B (> 0)
            num_points: Number of points
            volatility: Per-step volatility (defaults to config.volatility)
            end_time: Unix time the series ends at

        Returns:
            List of ratio PricePoints
        """
        vol = self.config.volatility if volatility is None else volatility
        self._check_inputs(price_a, price_b, num_points, vol)
        idio = self.config.idiosyncratic_scale

        current_a, current_b = float(price_a), float(price_b)
        points: list[PricePoint] = []
        for t in self._timestamps(num_points, end_time):
            shared = self._shock(vol)
            idio_a = self._shock(vol, idio)
            idio_b = self._shock(vol, idio)
            current_a *= 1 + shared + idio_a
            current_b *= 1 + shared + idio_b
            points.append(PricePoint(time=t, value=current_a / current_b))

        logger.debug("Generated %d synthetic ratio points", num_points)
        return points
