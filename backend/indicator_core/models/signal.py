"""Arrow signal models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

# Default distance of the drawn arrow from its anchor price (0.3%)
MARKER_OFFSET = 0.003


class Direction(str, Enum):
    """Signal direction."""

    LONG = "long"
    SHORT = "short"


class ArrowSignal(BaseModel):
    """Directional event emitted by the signal detector.

    ``price`` is the anchor price: the bar low for long signals and the bar
    high for short signals (or the raw value for line series).
    """

    model_config = ConfigDict(frozen=True)

    time: int
    price: float
    direction: Direction

    @property
    def is_long(self) -> bool:
        return self.direction == Direction.LONG

    @property
    def is_short(self) -> bool:
        return self.direction == Direction.SHORT

    def marker_price(self, offset: float = MARKER_OFFSET) -> float:
        """Get the price the arrow is drawn at.

        Long arrows sit slightly below their anchor, short arrows slightly
        above it, so they do not overlap the candle wick.
        """
        if self.direction == Direction.LONG:
            return self.price * (1 - offset)
        return self.price * (1 + offset)
