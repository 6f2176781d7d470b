"""Technical indicators (pure math, no I/O)."""

from indicator_core.indicators.rolling import (
    RollingStatistics,
    Z_SCORE_SENTINEL,
    compute_rolling_statistics,
    compute_z_score,
    rolling_mean_std,
    z_score_readings,
)
from indicator_core.indicators.oscillator import (
    RSI_SENTINEL,
    compute_rsi,
    rsi_readings,
)
from indicator_core.indicators.bands import (
    Bands,
    compute_bands,
    compute_price_bands,
    compute_z_score_bands,
)

__all__ = [
    "RollingStatistics",
    "Z_SCORE_SENTINEL",
    "compute_rolling_statistics",
    "compute_z_score",
    "rolling_mean_std",
    "z_score_readings",
    "RSI_SENTINEL",
    "compute_rsi",
    "rsi_readings",
    "Bands",
    "compute_bands",
    "compute_price_bands",
    "compute_z_score_bands",
]
