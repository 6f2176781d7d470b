"""Indicator and generator configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class SignalThresholds(BaseModel):
    """Thresholds for combined Z-score + oscillator signals.

    A negative ``z_threshold`` together with ``oscillator_oversold`` above
    ``oscillator_overbought`` is accepted; with such settings both
    directions can match at one index and the short side wins.
    """

    # Short needs Z > z_threshold, long needs Z < -z_threshold
    z_threshold: float = 2.0

    # Oscillator levels (0-100 scale)
    oscillator_overbought: float = Field(default=70.0, ge=0, le=100)
    oscillator_oversold: float = Field(default=30.0, ge=0, le=100)

    @property
    def is_conventional(self) -> bool:
        """True when long and short conditions are mutually exclusive."""
        return (
            self.z_threshold >= 0
            or self.oscillator_oversold <= self.oscillator_overbought
        )


class IndicatorConfig(BaseModel):
    """Indicator window lengths and signal thresholds."""

    z_score_length: int = Field(default=250, ge=1)
    rsi_length: int = Field(default=14, ge=1)
    thresholds: SignalThresholds = SignalThresholds()


class SyntheticConfig(BaseModel):
    """Parameters of the synthetic pair generator."""

    volatility: float = Field(default=0.015, ge=0)

    # Weight of leg A's move in leg B's move
    correlation: float = Field(default=0.7, ge=-1, le=1)

    # Idiosyncratic noise of each leg, as a fraction of volatility
    idiosyncratic_scale: float = Field(default=0.3, ge=0)

    # Maximum wick extension beyond the body, as a fraction of volatility
    wick_scale: float = Field(default=0.5, ge=0)

    # 15-minute bars
    bar_interval_seconds: int = Field(default=900, ge=1)

    # Chart sizing: max(z_score_length + warmup_padding, min_points)
    min_points: int = Field(default=300, ge=0)
    warmup_padding: int = Field(default=50, ge=0)

    seed: int | None = None


class EngineConfig(BaseModel):
    """Top-level engine configuration."""

    indicators: IndicatorConfig = IndicatorConfig()
    synthetic: SyntheticConfig = SyntheticConfig()

    def chart_points(self) -> int:
        """Number of synthetic bars needed to fill one chart past warm-up."""
        return max(
            self.indicators.z_score_length + self.synthetic.warmup_padding,
            self.synthetic.min_points,
        )
