"""Price series data models."""

from pydantic import BaseModel, ConfigDict, model_validator


class PricePoint(BaseModel):
    """A single (time, value) sample of a line series.

    ``time`` is a Unix timestamp in seconds, the unit chart consumers key
    their series on.
    """

    model_config = ConfigDict(frozen=True)

    time: int
    value: float


class OHLCBar(BaseModel):
    """OHLC (candlestick) bar."""

    model_config = ConfigDict(frozen=True)

    time: int
    open: float
    high: float
    low: float
    close: float

    @model_validator(mode="after")
    def _check_range(self):
        if self.high < max(self.open, self.close):
            raise ValueError(
                f"high {self.high} below body max {max(self.open, self.close)}"
            )
        if self.low > min(self.open, self.close):
            raise ValueError(
                f"low {self.low} above body min {min(self.open, self.close)}"
            )
        return self

    @property
    def is_bullish(self) -> bool:
        """Check if this is a bullish (green) candle."""
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        """Check if this is a bearish (red) candle."""
        return self.close < self.open

    @property
    def body_size(self) -> float:
        """Get the absolute size of the candle body."""
        return abs(self.close - self.open)

    @property
    def range_size(self) -> float:
        """Get the full range (high - low) of the candle."""
        return self.high - self.low


class SyntheticPair(BaseModel):
    """Two generated legs and their ratio, all aligned bar for bar."""

    model_config = ConfigDict(frozen=True)

    bars_a: list[OHLCBar]
    bars_b: list[OHLCBar]
    ratio: list[OHLCBar]

    def __len__(self) -> int:
        return len(self.ratio)
