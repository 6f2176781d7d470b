"""Synthetic market data for charts without a live feed."""

from indicator_core.synthetic.generator import (
    RandomSource,
    SyntheticSeriesGenerator,
    ratio_bar,
    seeded_source,
)
from indicator_core.synthetic.mock_chart import (
    SignalChartData,
    compute_spread,
    constant_band,
    generate_correlated_prices,
    generate_mock_prices,
    generate_signal_chart_data,
    normalize_prices,
    smoothed_z_score,
)

__all__ = [
    "RandomSource",
    "SyntheticSeriesGenerator",
    "ratio_bar",
    "seeded_source",
    "SignalChartData",
    "compute_spread",
    "constant_band",
    "generate_correlated_prices",
    "generate_mock_prices",
    "generate_signal_chart_data",
    "normalize_prices",
    "smoothed_z_score",
]
