"""Engine configuration.

Defaults come from environment variables (prefix ``INDICATOR_``, optional
``.env``). A YAML file can override them per deployment:

    indicators:
      z_score_length: 250
      rsi_length: 14
      thresholds:
        z_threshold: 2.0
        oscillator_overbought: 70
        oscillator_oversold: 30
    synthetic:
      volatility: 0.015
      correlation: 0.7
      seed: 42
"""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from indicator_core.models.config import (
    EngineConfig,
    IndicatorConfig,
    SignalThresholds,
    SyntheticConfig,
)

logger = logging.getLogger(__name__)


class EngineSettings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="INDICATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Indicator windows
    z_score_length: int = 250
    rsi_length: int = 14

    # Signal thresholds
    z_threshold: float = 2.0
    oscillator_overbought: float = 70.0
    oscillator_oversold: float = 30.0

    # Synthetic generator
    volatility: float = 0.015
    correlation: float = 0.7
    bar_interval_seconds: int = 900
    min_points: int = 300
    seed: int | None = None

    # Optional YAML override file
    config_path: str | None = None

    def to_engine_config(self) -> EngineConfig:
        """Build the validated engine configuration from these settings."""
        return EngineConfig(
            indicators=IndicatorConfig(
                z_score_length=self.z_score_length,
                rsi_length=self.rsi_length,
                thresholds=SignalThresholds(
                    z_threshold=self.z_threshold,
                    oscillator_overbought=self.oscillator_overbought,
                    oscillator_oversold=self.oscillator_oversold,
                ),
            ),
            synthetic=SyntheticConfig(
                volatility=self.volatility,
                correlation=self.correlation,
                bar_interval_seconds=self.bar_interval_seconds,
                min_points=self.min_points,
                seed=self.seed,
            ),
        )


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()


def _merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_engine_config(path: Path | str | None = None) -> EngineConfig:
    """Load engine config from a YAML file.

    Keys present in the file override the environment settings; missing
    keys keep them. Falls back to the environment settings alone when no
    path is given (directly or via ``INDICATOR_CONFIG_PATH``) or the file
    doesn't exist.
    """
    if path is None:
        path = get_settings().config_path
    if path is None:
        return get_settings().to_engine_config()

    config_path = Path(path)

    # Pick up a .env stored next to the YAML file
    load_dotenv(config_path.parent / ".env", override=False)
    base = EngineSettings().to_engine_config()

    if not config_path.exists():
        logger.info("No engine config found at %s, using defaults", config_path)
        return base

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    config = EngineConfig(**_merge(base.model_dump(), raw))
    logger.info(
        "Loaded engine config: z_length=%d, rsi_length=%d, z_threshold=%.2f, volatility=%.4f",
        config.indicators.z_score_length,
        config.indicators.rsi_length,
        config.indicators.thresholds.z_threshold,
        config.synthetic.volatility,
    )
    return config
