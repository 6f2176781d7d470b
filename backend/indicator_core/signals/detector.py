"""Combined Z-score + oscillator signal detection.

A short signal fires where the price is stretched above its rolling mean
(Z > threshold) while the oscillator is overbought; a long signal fires in
the mirrored situation. Every index is evaluated on its own: there is no
cooldown and adjacent bars may both fire.
"""

import logging
from typing import Sequence, Union

from indicator_core.indicators.oscillator import RSI_SENTINEL
from indicator_core.indicators.rolling import Z_SCORE_SENTINEL
from indicator_core.models.config import SignalThresholds
from indicator_core.models.series import OHLCBar, PricePoint
from indicator_core.models.signal import ArrowSignal, Direction

logger = logging.getLogger(__name__)

PriceSeries = Union[Sequence[PricePoint], Sequence[OHLCBar]]


def _anchor_price(point: PricePoint | OHLCBar, direction: Direction) -> float:
    """Bar high for shorts, bar low for longs, raw value for line points."""
    if isinstance(point, OHLCBar):
        return point.high if direction == Direction.SHORT else point.low
    return point.value


def _classify(z: float, rsi: float, thresholds: SignalThresholds) -> Direction | None:
    # Short first: it wins when unconventional thresholds let both match
    if z > thresholds.z_threshold and rsi > thresholds.oscillator_overbought:
        return Direction.SHORT
    if z < -thresholds.z_threshold and rsi < thresholds.oscillator_oversold:
        return Direction.LONG
    return None


def detect_signals(
    prices: PriceSeries,
    z_score: Sequence[PricePoint],
    rsi: Sequence[PricePoint],
    thresholds: SignalThresholds | None = None,
) -> list[ArrowSignal]:
    """
    Detect arrow signals from aligned Z-score and oscillator series.

    Args:
        prices: Line points or OHLC bars the indicators were computed on
        z_score: Z-score series aligned with ``prices``
        rsi: Oscillator series aligned with ``prices``
        thresholds: Signal thresholds (defaults: 2 / 70 / 30)

    Returns:
        Signals ordered by index, at most one per index
    """
    thresholds = thresholds or SignalThresholds()
    if not thresholds.is_conventional:
        logger.debug("Overlapping long/short thresholds, short takes precedence")

    n = len(prices)
    if len(z_score) < n or len(rsi) < n:
        logger.warning(
            "Indicator series shorter than prices (prices=%d, z=%d, rsi=%d); "
            "missing positions read as no-signal",
            n,
            len(z_score),
            len(rsi),
        )

    signals: list[ArrowSignal] = []
    for i, point in enumerate(prices):
        z = z_score[i].value if i < len(z_score) else Z_SCORE_SENTINEL
        r = rsi[i].value if i < len(rsi) else RSI_SENTINEL

        direction = _classify(z, r, thresholds)
        if direction is None:
            continue
        signals.append(
            ArrowSignal(
                time=point.time,
                price=_anchor_price(point, direction),
                direction=direction,
            )
        )

    logger.debug(
        "Detected %d signals over %d bars (z=%.2f, ob=%.1f, os=%.1f)",
        len(signals),
        n,
        thresholds.z_threshold,
        thresholds.oscillator_overbought,
        thresholds.oscillator_oversold,
    )
    return signals


class SignalDetector:
    """Signal detector with thresholds bound at construction."""

    def __init__(self, thresholds: SignalThresholds | None = None):
        self.thresholds = thresholds or SignalThresholds()

    def detect(
        self,
        prices: PriceSeries,
        z_score: Sequence[PricePoint],
        rsi: Sequence[PricePoint],
    ) -> list[ArrowSignal]:
        """Detect signals using this detector's thresholds."""
        return detect_signals(prices, z_score, rsi, self.thresholds)

    def classify(self, z: float, rsi: float) -> Direction | None:
        """Direction signalled by a single (Z, oscillator) pair, if any."""
        return _classify(z, rsi, self.thresholds)
