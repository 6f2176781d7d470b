"""Tagged indicator readings.

Indicator outputs have two kinds of positions: those where the window holds
enough history to measure something, and warm-up positions where it does not.
Chart consumers expect a plain numeric series, so the legacy representation
fills warm-up positions with a sentinel (0 for Z-score, 50 for the
oscillator) that is indistinguishable from a genuine reading.

Internally every indicator produces ``Reading`` values instead, and the
sentinel is only substituted by ``resolve`` at the consumer boundary.
"""

from dataclasses import dataclass
from typing import Sequence, Union

from indicator_core.models.series import PricePoint


@dataclass(frozen=True, slots=True)
class Insufficient:
    """Not enough window history at this position."""

    time: int


@dataclass(frozen=True, slots=True)
class Value:
    """A measured indicator value."""

    time: int
    value: float


Reading = Union[Insufficient, Value]


def is_sufficient(reading: Reading) -> bool:
    """Check whether a reading carries a measured value."""
    return isinstance(reading, Value)


def resolve(readings: Sequence[Reading], sentinel: float) -> list[PricePoint]:
    """Convert tagged readings to a numeric series.

    Args:
        readings: Tagged readings, one per source position
        sentinel: Value substituted for ``Insufficient`` positions

    Returns:
        List of PricePoint aligned with ``readings``
    """
    return [
        PricePoint(
            time=r.time,
            value=r.value if isinstance(r, Value) else sentinel,
        )
        for r in readings
    ]


def first_sufficient_index(readings: Sequence[Reading]) -> int:
    """Index of the first measured reading (``len(readings)`` if none)."""
    for i, r in enumerate(readings):
        if isinstance(r, Value):
            return i
    return len(readings)
