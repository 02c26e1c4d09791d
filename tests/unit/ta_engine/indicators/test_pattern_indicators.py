"""Tests for pivot points and Fibonacci retracements."""

import pytest

from ta_engine.domain.signals.indicators import (
    IndicatorParamError,
    PivotParams,
    calculate_fibonacci,
    calculate_pivot_points,
)
from ta_engine.domain.signals.series import values_of


class TestPivotPoints:
    def test_standard_levels_from_previous_bar(self, bars_from_rows):
        bars = bars_from_rows([(10, 12, 8, 10), (10, 11, 9, 10)])
        result = calculate_pivot_points(bars, "standard")

        assert result.pivot[0].value is None
        assert result.pivot[1].value == pytest.approx(10.0)
        assert result.r1[1].value == pytest.approx(12.0)
        assert result.r2[1].value == pytest.approx(14.0)
        assert result.r3[1].value == pytest.approx(16.0)
        assert result.s1[1].value == pytest.approx(8.0)
        assert result.s2[1].value == pytest.approx(6.0)
        assert result.s3[1].value == pytest.approx(4.0)

    def test_fibonacci_method(self, bars_from_rows):
        bars = bars_from_rows([(10, 12, 8, 10), (10, 11, 9, 10)])
        result = calculate_pivot_points(bars, "fibonacci")

        assert result.r1[1].value == pytest.approx(10.0 + 0.382 * 4)
        assert result.s3[1].value == pytest.approx(6.0)

    def test_woodie_weights_close(self, bars_from_rows):
        bars = bars_from_rows([(10, 12, 8, 11), (10, 11, 9, 10)])
        result = calculate_pivot_points(bars, "woodie")

        assert result.pivot[1].value == pytest.approx((12 + 8 + 2 * 11) / 4)

    def test_unknown_method_rejected(self, bars_from_rows):
        with pytest.raises(IndicatorParamError):
            PivotParams(method="camarilla")
        with pytest.raises(IndicatorParamError):
            calculate_pivot_points(bars_from_rows([(1, 2, 0, 1)]), "camarilla")

    def test_levels_ordered(self, sample_bars):
        result = calculate_pivot_points(sample_bars)
        for i in range(1, len(sample_bars)):
            levels = [result.s3[i].value, result.s2[i].value, result.s1[i].value,
                      result.pivot[i].value, result.r1[i].value, result.r2[i].value,
                      result.r3[i].value]
            assert levels == sorted(levels)


class TestFibonacci:
    def test_uptrend_retraces_from_high(self, bars_from_rows):
        bars = bars_from_rows([(6, 7, 5, 6), (8, 10, 7, 9), (12, 15, 11, 14)])
        result = calculate_fibonacci(bars, 50)

        assert result.swing_high.price == 15
        assert result.swing_low.price == 5
        assert result.is_uptrend
        assert [lvl.label for lvl in result.levels] == [
            "0.0%", "23.6%", "38.2%", "50.0%", "61.8%", "78.6%", "100.0%"
        ]
        assert result.levels[0].price == pytest.approx(15.0)
        assert result.levels[3].price == pytest.approx(10.0)
        assert result.levels[-1].price == pytest.approx(5.0)

    def test_downtrend_extends_from_low(self, bars_from_rows):
        bars = bars_from_rows([(14, 15, 11, 12), (9, 10, 7, 8), (6, 7, 5, 6)])
        result = calculate_fibonacci(bars, 50)

        assert not result.is_uptrend
        assert result.levels[0].price == pytest.approx(5.0)
        assert result.levels[-1].price == pytest.approx(15.0)

    def test_lookback_limits_window(self, bars_from_rows):
        bars = bars_from_rows([(50, 100, 1, 50), (6, 7, 5, 6), (12, 15, 11, 14)])
        result = calculate_fibonacci(bars, 2)
        assert result.swing_high.price == 15
        assert result.swing_low.price == 5

    def test_empty_input(self):
        result = calculate_fibonacci([], 50)
        assert result.levels == []
        assert result.swing_high is None
        assert result.swing_low is None
        assert result.to_dict() == {"levels": [], "swing_high": None, "swing_low": None}

    def test_lookback_must_be_positive(self):
        with pytest.raises(IndicatorParamError):
            from ta_engine.domain.signals.indicators import FibonacciParams

            FibonacciParams(lookback=0)


def test_pivot_series_none_only_on_first_bar(sample_bars):
    values = values_of(calculate_pivot_points(sample_bars).pivot)
    assert values[0] is None
    assert all(v is not None for v in values[1:])
