"""Tests for ATR, Bollinger Bands, OBV and VWAP."""

from datetime import datetime

import pytest

from ta_engine.domain.signals.indicators import (
    BollingerParams,
    IndicatorParamError,
    calculate_atr,
    calculate_bollinger,
    calculate_obv,
    calculate_vwap,
)
from ta_engine.domain.signals.indicators.volatility.bollinger import bandwidth
from ta_engine.domain.signals.models import Bar
from ta_engine.domain.signals.series import values_of


class TestATR:
    def test_warmup(self, rising_bars):
        values = values_of(calculate_atr(rising_bars, 14))
        assert all(v is None for v in values[:14])
        assert all(v is not None for v in values[14:])

    def test_constant_true_range(self, rising_bars):
        # high = close + 1, low = previous close - 1 -> true range 3 after bar 0
        values = values_of(calculate_atr(rising_bars, 14))
        assert values[14] == pytest.approx(3.0)
        assert values[-1] == pytest.approx(3.0)

    def test_needs_more_than_period_bars(self, bars_from_closes):
        bars = bars_from_closes([1.0, 2.0, 3.0])
        assert values_of(calculate_atr(bars, 3)) == [None, None, None]

    def test_single_bar(self, bars_from_closes):
        assert values_of(calculate_atr(bars_from_closes([1.0]), 1)) == [None]


class TestBollinger:
    def test_band_ordering(self, sample_bars):
        result = calculate_bollinger(sample_bars, 20, 2.0)
        for u, m, l in zip(result.upper, result.middle, result.lower):
            if m.value is None:
                assert u.value is None and l.value is None
                continue
            assert l.value <= m.value <= u.value

    def test_constant_prices_collapse(self, bars_from_closes):
        result = calculate_bollinger(bars_from_closes([50.0] * 25), 20, 2.0)
        assert result.upper[-1].value == pytest.approx(50.0)
        assert result.lower[-1].value == pytest.approx(50.0)

    def test_population_standard_deviation(self, bars_from_closes):
        # closes 1..4: mean 2.5, population variance 1.25
        result = calculate_bollinger(bars_from_closes([1.0, 2.0, 3.0, 4.0]), 4, 1.0)
        assert result.upper[3].value == pytest.approx(2.5 + 1.25 ** 0.5)
        assert result.lower[3].value == pytest.approx(2.5 - 1.25 ** 0.5)

    def test_warmup(self, sample_bars):
        result = calculate_bollinger(sample_bars, 20)
        assert result.middle[18].value is None
        assert result.middle[19].value is not None

    def test_bandwidth(self):
        assert bandwidth(110.0, 100.0, 90.0) == pytest.approx(0.2)
        assert bandwidth(None, 100.0, 90.0) is None
        assert bandwidth(1.0, 0.0, -1.0) is None

    def test_std_dev_must_be_positive(self):
        with pytest.raises(IndicatorParamError):
            BollingerParams(std_dev=0)


class TestOBV:
    def test_accumulates_by_direction(self, bars_from_closes):
        bars = bars_from_closes([10.0, 11.0, 10.0, 10.0, 12.0])
        assert values_of(calculate_obv(bars)) == [1000.0, 2000.0, 1000.0, 1000.0, 2000.0]

    def test_missing_volume_counts_as_zero(self, bars_from_closes):
        bars = bars_from_closes([10.0, 11.0, 12.0], volume=None)
        assert values_of(calculate_obv(bars)) == [0.0, 0.0, 0.0]

    def test_empty(self):
        assert calculate_obv([]) == []


class TestVWAP:
    def test_cumulative_typical_price(self):
        bars = [
            Bar(time=datetime(2024, 1, 1), open=10, high=12, low=8, close=10, volume=100),
            Bar(time=datetime(2024, 1, 2), open=10, high=22, low=18, close=20, volume=300),
        ]
        values = values_of(calculate_vwap(bars))
        assert values[0] == pytest.approx(10.0)
        assert values[1] == pytest.approx((10.0 * 100 + 20.0 * 300) / 400)

    def test_bars_without_volume_are_skipped(self):
        bars = [
            Bar(time=datetime(2024, 1, 1), open=10, high=12, low=8, close=10, volume=None),
            Bar(time=datetime(2024, 1, 2), open=10, high=12, low=8, close=10, volume=0),
            Bar(time=datetime(2024, 1, 3), open=10, high=13, low=10, close=13, volume=50),
        ]
        assert values_of(calculate_vwap(bars)) == [None, None, pytest.approx(12.0)]
