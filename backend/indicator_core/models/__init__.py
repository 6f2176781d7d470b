"""Data models."""

from indicator_core.models.series import OHLCBar, PricePoint, SyntheticPair
from indicator_core.models.reading import (
    Insufficient,
    Reading,
    Value,
    first_sufficient_index,
    is_sufficient,
    resolve,
)
from indicator_core.models.signal import ArrowSignal, Direction, MARKER_OFFSET
from indicator_core.models.config import (
    EngineConfig,
    IndicatorConfig,
    SignalThresholds,
    SyntheticConfig,
)
from indicator_core.models.converters import (
    bars_to_frame,
    datetime_to_timestamp,
    frame_to_bars,
    ohlc_to_close,
    points_from_values,
    points_to_frame,
    series_times,
    series_values,
    timestamp_to_datetime,
)

__all__ = [
    "OHLCBar",
    "PricePoint",
    "SyntheticPair",
    "Insufficient",
    "Reading",
    "Value",
    "first_sufficient_index",
    "is_sufficient",
    "resolve",
    "ArrowSignal",
    "Direction",
    "MARKER_OFFSET",
    "EngineConfig",
    "IndicatorConfig",
    "SignalThresholds",
    "SyntheticConfig",
    "bars_to_frame",
    "datetime_to_timestamp",
    "frame_to_bars",
    "ohlc_to_close",
    "points_from_values",
    "points_to_frame",
    "series_times",
    "series_values",
    "timestamp_to_datetime",
]
