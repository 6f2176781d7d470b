"""Indicator engine: runs the full indicator chain for one chart.

closes -> (Z-score, oscillator, price bands) -> arrow signals

The engine holds configuration and a synthetic generator only; every call
builds its outputs from scratch, so callers simply call again whenever
prices, windows or thresholds change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

import pandas as pd

from indicator_core.indicators import (
    Bands,
    RSI_SENTINEL,
    compute_bands,
    compute_rolling_statistics,
    compute_z_score_bands,
    rsi_readings,
)
from indicator_core.models.config import EngineConfig
from indicator_core.models.converters import ohlc_to_close
from indicator_core.models.reading import Reading, is_sufficient, resolve
from indicator_core.models.series import OHLCBar, PricePoint, SyntheticPair
from indicator_core.models.signal import ArrowSignal
from indicator_core.signals import SignalDetector
from indicator_core.synthetic import SyntheticSeriesGenerator

logger = logging.getLogger(__name__)

PriceInput = Union[Sequence[PricePoint], Sequence[OHLCBar]]


@dataclass
class IndicatorResult:
    """All indicator outputs for one price series, aligned with it."""

    closes: list[PricePoint]
    bars: list[OHLCBar] | None
    z_score: list[PricePoint]
    z_readings: list[Reading]
    rsi: list[PricePoint]
    oscillator_readings: list[Reading]
    price_bands: Bands
    arrows: list[ArrowSignal]

    def __len__(self) -> int:
        return len(self.closes)

    def to_frame(self) -> pd.DataFrame:
        """Tabular view indexed by UTC time, one row per input position.

        ``signal`` holds "long"/"short" where an arrow fired; the
        ``*_ready`` columns are False where the value is a warm-up sentinel.
        """
        times = [p.time for p in self.closes]
        signal_by_time = {a.time: a.direction.value for a in self.arrows}
        data = {
            "close": [p.value for p in self.closes],
            "z_score": [p.value for p in self.z_score],
            "z_ready": [is_sufficient(r) for r in self.z_readings],
            "rsi": [p.value for p in self.rsi],
            "rsi_ready": [is_sufficient(r) for r in self.oscillator_readings],
        }
        for name, series in self.price_bands.as_dict().items():
            data[name] = [p.value for p in series]
        data["signal"] = [signal_by_time.get(t) for t in times]

        index = pd.to_datetime(times, unit="s", utc=True)
        return pd.DataFrame(data, index=index).rename_axis("time")


@dataclass
class PairChartData:
    """Synthetic pair bars with the indicators of their ratio series."""

    pair: SyntheticPair
    indicators: IndicatorResult


@dataclass
class OscillatorPanels:
    """Z-score and oscillator sub-chart data for a ratio line series."""

    prices: list[PricePoint]
    z_score: list[PricePoint]
    rsi: list[PricePoint]
    z_bands: Bands


class IndicatorEngine:
    """Compute Z-score, oscillator, bands and signals for chart views."""

    def __init__(
        self,
        config: EngineConfig | None = None,
        generator: SyntheticSeriesGenerator | None = None,
    ):
        self.config = config or EngineConfig()
        self.generator = generator or SyntheticSeriesGenerator(self.config.synthetic)
        self.detector = SignalDetector(self.config.indicators.thresholds)

    # --------- real data ---------
    def calculate_all(self, series: PriceInput) -> IndicatorResult:
        """
        Calculate every indicator for a line or bar series.

        Args:
            series: PricePoints or OHLCBars ordered by time. With bars the
                indicators run on the closes and arrows anchor to high/low.

        Returns:
            IndicatorResult aligned with ``series``
        """
        cfg = self.config.indicators
        bars: list[OHLCBar] | None = None
        if series and isinstance(series[0], OHLCBar):
            bars = list(series)
            closes = ohlc_to_close(bars)
        else:
            closes = list(series)

        stats = compute_rolling_statistics(closes, cfg.z_score_length)
        osc_readings = rsi_readings(closes, cfg.rsi_length)
        rsi = resolve(osc_readings, RSI_SENTINEL)

        # Bands use the rolling stats of the price series itself
        price_bands = compute_bands(stats.mean, stats.std)

        arrows = self.detector.detect(bars if bars is not None else closes, stats.z_score, rsi)

        logger.debug(
            "Indicators: %d points, z_length=%d, rsi_length=%d, %d arrows",
            len(closes),
            cfg.z_score_length,
            cfg.rsi_length,
            len(arrows),
        )
        return IndicatorResult(
            closes=closes,
            bars=bars,
            z_score=stats.z_score,
            z_readings=stats.readings,
            rsi=rsi,
            oscillator_readings=osc_readings,
            price_bands=price_bands,
            arrows=arrows,
        )

    # --------- synthetic data ---------
    @staticmethod
    def has_price_data(price_a: float, price_b: float) -> bool:
        """Both anchor prices are needed to synthesize a pair."""
        return price_a > 0 and price_b > 0

    def build_pair_chart(
        self,
        price_a: float,
        price_b: float,
        end_time: int | None = None,
    ) -> PairChartData | None:
        """
        Generate synthetic pair bars and run the indicators on the ratio.

        Args:
            price_a: Entry price of leg A
            price_b: Entry price of leg B
            end_time: Unix time the series ends at (defaults to now)

        Returns:
            PairChartData, or None when either price is missing (<= 0)
        """
        if not self.has_price_data(price_a, price_b):
            logger.debug("No price data for pair chart (A=%s, B=%s)", price_a, price_b)
            return None

        pair = self.generator.generate_pair_ohlc(
            price_a,
            price_b,
            self.config.chart_points(),
            end_time=end_time,
        )
        return PairChartData(pair=pair, indicators=self.calculate_all(pair.ratio))

    def build_oscillator_panels(
        self,
        price_a: float,
        price_b: float,
        end_time: int | None = None,
    ) -> OscillatorPanels | None:
        """
        Generate a synthetic ratio line with its Z-score and oscillator panels.

        Returns:
            OscillatorPanels, or None when either price is missing (<= 0)
        """
        if not self.has_price_data(price_a, price_b):
            return None

        cfg = self.config.indicators
        prices = self.generator.generate_pair_prices(
            price_a,
            price_b,
            self.config.chart_points(),
            end_time=end_time,
        )
        stats = compute_rolling_statistics(prices, cfg.z_score_length)
        return OscillatorPanels(
            prices=prices,
            z_score=stats.z_score,
            rsi=resolve(rsi_readings(prices, cfg.rsi_length), RSI_SENTINEL),
            z_bands=compute_z_score_bands(stats.z_score),
        )
