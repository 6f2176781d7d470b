"""Converters between bar, line and tabular representations.

Bar series (OHLCBar) feed the candlestick view and the signal detector;
line series (PricePoint) feed the indicators. Pandas frames are provided
for notebooks and exports and are never used on the computation path.
"""

from datetime import datetime, timezone
from typing import Sequence

import numpy as np
import pandas as pd

from indicator_core.models.series import OHLCBar, PricePoint


# =============================================================================
# Timestamp conversion helpers
# =============================================================================

def datetime_to_timestamp(dt: datetime) -> int:
    """Convert datetime to Unix timestamp (whole seconds)."""
    return int(dt.timestamp())


def timestamp_to_datetime(ts: int) -> datetime:
    """Convert Unix timestamp to UTC datetime."""
    return datetime.fromtimestamp(ts, tz=timezone.utc)


# =============================================================================
# Series conversions
# =============================================================================

def ohlc_to_close(bars: Sequence[OHLCBar]) -> list[PricePoint]:
    """Extract the close line from a bar series.

    Args:
        bars: OHLC bars

    Returns:
        List of PricePoint with the bar closes, aligned with ``bars``
    """
    return [PricePoint(time=b.time, value=b.close) for b in bars]


def series_times(series: Sequence[PricePoint] | Sequence[OHLCBar]) -> list[int]:
    """Get the timestamps of a line or bar series."""
    return [p.time for p in series]


def series_values(series: Sequence[PricePoint]) -> np.ndarray:
    """Get the values of a line series as a float64 array."""
    return np.array([p.value for p in series], dtype=np.float64)


def points_from_values(times: Sequence[int], values: Sequence[float]) -> list[PricePoint]:
    """Zip timestamps and values back into a line series."""
    if len(times) != len(values):
        raise ValueError(f"times/values length mismatch: {len(times)} != {len(values)}")
    return [PricePoint(time=int(t), value=float(v)) for t, v in zip(times, values)]


# =============================================================================
# Pandas conversions
# =============================================================================

def points_to_frame(series: Sequence[PricePoint], name: str = "value") -> pd.DataFrame:
    """Convert a line series to a DataFrame indexed by UTC time."""
    index = pd.to_datetime([p.time for p in series], unit="s", utc=True)
    return pd.DataFrame({name: [p.value for p in series]}, index=index).rename_axis("time")


def bars_to_frame(bars: Sequence[OHLCBar]) -> pd.DataFrame:
    """Convert a bar series to an OHLC DataFrame indexed by UTC time."""
    index = pd.to_datetime([b.time for b in bars], unit="s", utc=True)
    return pd.DataFrame(
        {
            "open": [b.open for b in bars],
            "high": [b.high for b in bars],
            "low": [b.low for b in bars],
            "close": [b.close for b in bars],
        },
        index=index,
    ).rename_axis("time")


def frame_to_bars(frame: pd.DataFrame) -> list[OHLCBar]:
    """Convert an OHLC DataFrame (DatetimeIndex) back to bars."""
    times = [ts.timestamp() for ts in frame.index]
    return [
        OHLCBar(time=int(t), open=row.open, high=row.high, low=row.low, close=row.close)
        for t, row in zip(times, frame.itertuples(index=False))
    ]
