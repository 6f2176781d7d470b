"""Integration tests for the indicator engine."""

import pytest

from indicator_core.engine import IndicatorEngine
from indicator_core.models import (
    Direction,
    EngineConfig,
    IndicatorConfig,
    Insufficient,
    OHLCBar,
    PricePoint,
    SyntheticConfig,
    Value,
)
from indicator_core.synthetic import SyntheticSeriesGenerator

START = 1_700_000_000
END = 1_700_000_100

SPIKE = [100.0] * 30 + [105.0, 110.0, 115.0]


def _points(values) -> list[PricePoint]:
    return [PricePoint(time=START + i * 900, value=float(v)) for i, v in enumerate(values)]


def _bars(values) -> list[OHLCBar]:
    return [
        OHLCBar(time=START + i * 900, open=v, high=v + 1, low=v - 1, close=v)
        for i, v in enumerate(values)
    ]


@pytest.fixture
def small_engine():
    config = EngineConfig(indicators=IndicatorConfig(z_score_length=20, rsi_length=5))
    return IndicatorEngine(config)


@pytest.fixture
def seeded_engine():
    config = EngineConfig(synthetic=SyntheticConfig(seed=123))
    return IndicatorEngine(config)


class TestCalculateAll:
    """Tests for the full indicator chain on real series."""

    def test_spike_fires_short(self, small_engine):
        """Test a sharp rally after a flat stretch fires short arrows."""
        result = small_engine.calculate_all(_points(SPIKE))

        assert len(result) == len(SPIKE)
        assert [a.direction for a in result.arrows] == [Direction.SHORT] * 3
        assert result.arrows[0].time == START + 30 * 900
        assert result.arrows[0].price == 105.0

    def test_flat_stretch_is_quiet(self, small_engine):
        """Test the flat stretch gives Z 0, oscillator 50 and no arrows."""
        result = small_engine.calculate_all(_points([100.0] * 40))

        assert result.arrows == []
        assert all(p.value == 0 for p in result.z_score)
        assert all(p.value == 50 for p in result.rsi)

    def test_bars_anchor_to_high(self, small_engine):
        """Test bar input runs on closes and anchors shorts to the high."""
        result = small_engine.calculate_all(_bars(SPIKE))

        assert [p.value for p in result.closes] == SPIKE
        assert result.bars is not None
        assert result.arrows[0].price == 106.0

    def test_readings_tag_warmup(self, small_engine):
        """Test warm-up positions are tagged Insufficient in both chains."""
        result = small_engine.calculate_all(_points(SPIKE))

        assert isinstance(result.z_readings[18], Insufficient)
        assert isinstance(result.z_readings[19], Value)
        assert isinstance(result.oscillator_readings[4], Insufficient)
        assert isinstance(result.oscillator_readings[5], Value)

    def test_bands_track_price(self, small_engine):
        """Test price bands are in price units around the rolling mean."""
        result = small_engine.calculate_all(_points(SPIKE))
        bands = result.price_bands

        assert len(bands) == len(SPIKE)
        assert bands.mean_line[10].value == 100.0
        assert bands.upper_band2[-1].value > bands.mean_line[-1].value > 100.0

    def test_to_frame(self, small_engine):
        """Test tabular view has one row per input with signal labels."""
        frame = small_engine.calculate_all(_points(SPIKE)).to_frame()

        assert len(frame) == len(SPIKE)
        assert frame.index.name == "time"
        assert list(frame.columns) == [
            "close",
            "z_score",
            "z_ready",
            "rsi",
            "rsi_ready",
            "upper_band2",
            "upper_band1",
            "mean_line",
            "lower_band1",
            "lower_band2",
            "signal",
        ]
        assert frame["signal"].iloc[30] == "short"
        assert frame["signal"].iloc[0] is None
        assert not frame["z_ready"].iloc[0]
        assert frame["rsi_ready"].iloc[-1]

    def test_empty_series(self, small_engine):
        """Test empty input gives empty outputs."""
        result = small_engine.calculate_all([])

        assert len(result) == 0
        assert result.arrows == []
        assert result.bars is None


class TestPairChart:
    """Tests for synthetic pair charts."""

    def test_missing_price_returns_none(self, seeded_engine):
        """Test charts are skipped without both anchor prices."""
        assert seeded_engine.build_pair_chart(0, 10.0) is None
        assert seeded_engine.build_pair_chart(10.0, -1) is None
        assert seeded_engine.build_oscillator_panels(0, 0) is None

    def test_chart_size(self, seeded_engine):
        """Test the chart holds max(z_length + 50, 300) bars."""
        chart = seeded_engine.build_pair_chart(100.0, 50.0, end_time=END)

        assert len(chart.pair) == 300
        assert len(chart.indicators) == 300
        assert chart.indicators.bars == chart.pair.ratio

    def test_arrows_anchor_to_ratio_bars(self, seeded_engine):
        """Test any arrow sits on the high/low of its ratio bar."""
        chart = seeded_engine.build_pair_chart(100.0, 50.0, end_time=END)
        by_time = {bar.time: bar for bar in chart.pair.ratio}

        for arrow in chart.indicators.arrows:
            bar = by_time[arrow.time]
            assert arrow.price == (bar.high if arrow.is_short else bar.low)

    def test_deterministic(self):
        """Test two engines with the same seed build identical charts."""
        config = EngineConfig(synthetic=SyntheticConfig(seed=9))
        a = IndicatorEngine(config).build_pair_chart(10.0, 5.0, end_time=END)
        b = IndicatorEngine(config).build_pair_chart(10.0, 5.0, end_time=END)

        assert a.pair == b.pair
        assert a.indicators.arrows == b.indicators.arrows

    def test_custom_generator(self):
        """Test an injected generator is used as-is."""
        generator = SyntheticSeriesGenerator(random_source=lambda: 0.5)
        engine = IndicatorEngine(generator=generator)

        chart = engine.build_pair_chart(80.0, 40.0, end_time=END)

        assert all(bar.close == pytest.approx(2.0) for bar in chart.pair.ratio)
        assert chart.indicators.arrows == []


class TestOscillatorPanels:
    """Tests for Z-score/oscillator sub-chart data."""

    def test_panels(self, seeded_engine):
        """Test panels are aligned and z-space bands are flat."""
        panels = seeded_engine.build_oscillator_panels(100.0, 50.0, end_time=END)

        assert len(panels.prices) == len(panels.z_score) == len(panels.rsi) == 300
        assert {p.value for p in panels.z_bands.upper_band2} == {2.0}
        assert {p.value for p in panels.z_bands.lower_band2} == {-2.0}
        assert all(0 <= p.value <= 100 for p in panels.rsi)
        # Z warm-up covers the first 249 positions
        assert all(p.value == 0 for p in panels.z_score[:249])
