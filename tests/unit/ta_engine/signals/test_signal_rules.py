"""
Tests for the per-indicator signal rules.

Rules are exercised against a SignalContext built from hand-written
indicator values so each threshold and crossover is checked in isolation.
"""

from typing import List, Optional

import pytest

from ta_engine.domain.signals import SignalDetectionConfig
from ta_engine.domain.signals.models import SignalDirection, SignalKind, SignalStrength
from ta_engine.domain.signals.rules import SIGNAL_RULES, SignalContext
from ta_engine.domain.signals.rules.momentum_rules import macd_rule, rsi_rule, stochastic_rule
from ta_engine.domain.signals.rules.trend_rules import adx_rule, ma_cross_rule
from ta_engine.domain.signals.rules.volatility_rules import bollinger_rule

SERIES_FIELDS = (
    "rsi", "macd", "macd_signal",
    "bb_upper", "bb_middle", "bb_lower",
    "stoch_k", "stoch_d",
    "adx", "di_plus", "di_minus",
)


@pytest.fixture
def make_ctx(bars_from_closes):
    def _make(closes: Optional[List[float]] = None, config=None, **series) -> SignalContext:
        bars = bars_from_closes(closes or [100.0, 100.0])
        values = {name: [None] * len(bars) for name in SERIES_FIELDS}
        values.update(series)
        return SignalContext(bars=bars, config=config or SignalDetectionConfig(), **values)

    return _make


def _kinds(signals):
    return [s.kind for s in signals]


def test_rule_order():
    assert [rule.__name__ for rule in SIGNAL_RULES] == [
        "rsi_rule", "macd_rule", "bollinger_rule", "stochastic_rule", "adx_rule", "ma_cross_rule",
    ]


class TestRSIRule:
    def test_entering_oversold(self, make_ctx):
        signals = rsi_rule(make_ctx(rsi=[35.0, 28.0]), 1)

        assert _kinds(signals) == [SignalKind.RSI_OVERSOLD]
        signal = signals[0]
        assert signal.direction == SignalDirection.BULLISH
        assert signal.strength == SignalStrength.MODERATE
        assert signal.value == 28.0
        assert signal.bar_index == 1
        assert signal.indicator == "RSI"
        assert signal.description == "RSI ist überverkauft (28.0)"

    def test_strong_oversold(self, make_ctx):
        signals = rsi_rule(make_ctx(rsi=[35.0, 15.0]), 1)
        assert signals[0].strength == SignalStrength.STRONG

    def test_already_oversold_is_silent(self, make_ctx):
        assert rsi_rule(make_ctx(rsi=[25.0, 28.0]), 1) == []

    def test_entering_overbought(self, make_ctx):
        signals = rsi_rule(make_ctx(rsi=[65.0, 85.0]), 1)
        assert _kinds(signals) == [SignalKind.RSI_OVERBOUGHT]
        assert signals[0].direction == SignalDirection.BEARISH
        assert signals[0].strength == SignalStrength.STRONG

    def test_threshold_is_inclusive(self, make_ctx):
        assert _kinds(rsi_rule(make_ctx(rsi=[31.0, 30.0]), 1)) == [SignalKind.RSI_OVERSOLD]

    def test_missing_values(self, make_ctx):
        assert rsi_rule(make_ctx(rsi=[None, 10.0]), 1) == []

    def test_custom_thresholds(self, make_ctx):
        config = SignalDetectionConfig(rsi_oversold=40, rsi_strong_oversold=35)
        signals = rsi_rule(make_ctx(rsi=[45.0, 38.0], config=config), 1)
        assert signals[0].strength == SignalStrength.MODERATE


class TestMACDRule:
    def test_bullish_cross_above_zero_is_moderate(self, make_ctx):
        signals = macd_rule(make_ctx(macd=[-1.0, 0.5], macd_signal=[0.0, 0.0]), 1)
        assert _kinds(signals) == [SignalKind.MACD_BULLISH_CROSS]
        assert signals[0].strength == SignalStrength.MODERATE

    def test_bullish_cross_below_zero_is_strong(self, make_ctx):
        signals = macd_rule(make_ctx(macd=[-2.0, -0.5], macd_signal=[-1.0, -1.0]), 1)
        assert signals[0].strength == SignalStrength.STRONG

    def test_bearish_cross_above_zero_is_strong(self, make_ctx):
        signals = macd_rule(make_ctx(macd=[1.0, 0.5], macd_signal=[0.8, 0.8]), 1)
        assert _kinds(signals) == [SignalKind.MACD_BEARISH_CROSS]
        assert signals[0].direction == SignalDirection.BEARISH
        assert signals[0].strength == SignalStrength.STRONG

    def test_no_cross(self, make_ctx):
        assert macd_rule(make_ctx(macd=[1.0, 2.0], macd_signal=[0.5, 0.5]), 1) == []


class TestStochasticRule:
    def test_entering_oversold(self, make_ctx):
        signals = stochastic_rule(make_ctx(stoch_k=[25.0, 15.0], stoch_d=[30.0, 20.0]), 1)
        assert _kinds(signals) == [SignalKind.STOCHASTIC_OVERSOLD]
        assert signals[0].strength == SignalStrength.MODERATE
        assert signals[0].value == 15.0

    def test_strong_overbought(self, make_ctx):
        signals = stochastic_rule(make_ctx(stoch_k=[75.0, 95.0], stoch_d=[76.0, 94.0]), 1)
        assert _kinds(signals) == [SignalKind.STOCHASTIC_OVERBOUGHT]
        assert signals[0].strength == SignalStrength.STRONG

    def test_bullish_cross_below_midline(self, make_ctx):
        signals = stochastic_rule(make_ctx(stoch_k=[30.0, 40.0], stoch_d=[35.0, 35.0]), 1)
        assert _kinds(signals) == [SignalKind.STOCHASTIC_BULLISH_CROSS]
        assert signals[0].strength == SignalStrength.MODERATE

    def test_bullish_cross_above_midline_is_ignored(self, make_ctx):
        assert stochastic_rule(make_ctx(stoch_k=[60.0, 70.0], stoch_d=[65.0, 65.0]), 1) == []

    def test_bearish_cross_above_midline(self, make_ctx):
        signals = stochastic_rule(make_ctx(stoch_k=[70.0, 60.0], stoch_d=[65.0, 65.0]), 1)
        assert _kinds(signals) == [SignalKind.STOCHASTIC_BEARISH_CROSS]

    def test_strong_bullish_cross_in_oversold_zone(self, make_ctx):
        signals = stochastic_rule(make_ctx(stoch_k=[10.0, 15.0], stoch_d=[12.0, 12.0]), 1)
        assert _kinds(signals) == [SignalKind.STOCHASTIC_BULLISH_CROSS]
        assert signals[0].strength == SignalStrength.STRONG


class TestBollingerRule:
    def _bands(self, widths):
        # middle 100, band width as a fraction of the middle
        return dict(
            bb_middle=[100.0] * len(widths),
            bb_upper=[100.0 + 50.0 * w for w in widths],
            bb_lower=[100.0 - 50.0 * w for w in widths],
        )

    def test_strong_squeeze(self, make_ctx):
        ctx = make_ctx([100.0] * 4, **self._bands([0.2, 0.15, 0.1, 0.04]))
        signals = bollinger_rule(ctx, 3)
        assert _kinds(signals) == [SignalKind.BOLLINGER_SQUEEZE]
        assert signals[0].direction == SignalDirection.NEUTRAL
        assert signals[0].strength == SignalStrength.STRONG

    def test_moderate_squeeze(self, make_ctx):
        ctx = make_ctx([100.0] * 3, **self._bands([0.2, 0.15, 0.08]))
        assert bollinger_rule(ctx, 2)[0].strength == SignalStrength.MODERATE

    def test_no_squeeze_when_narrower_earlier(self, make_ctx):
        ctx = make_ctx([100.0] * 3, **self._bands([0.03, 0.15, 0.08]))
        assert bollinger_rule(ctx, 2) == []

    def test_no_squeeze_above_threshold(self, make_ctx):
        ctx = make_ctx([100.0] * 3, **self._bands([0.3, 0.25, 0.2]))
        assert bollinger_rule(ctx, 2) == []

    def test_breakout_up(self, make_ctx):
        ctx = make_ctx([100.0, 115.0], **self._bands([0.2, 0.2]))
        assert _kinds(bollinger_rule(ctx, 1)) == [SignalKind.BOLLINGER_BREAKOUT_UP]

    def test_breakout_down(self, make_ctx):
        ctx = make_ctx([100.0, 85.0], **self._bands([0.2, 0.2]))
        signals = bollinger_rule(ctx, 1)
        assert _kinds(signals) == [SignalKind.BOLLINGER_BREAKOUT_DOWN]
        assert signals[0].strength == SignalStrength.MODERATE

    def test_breakout_needs_previous_band(self, make_ctx):
        bands = self._bands([0.2, 0.2])
        bands["bb_upper"][0] = None
        ctx = make_ctx([100.0, 115.0], **bands)
        assert bollinger_rule(ctx, 1) == []


class TestADXRule:
    def test_trend_start(self, make_ctx):
        ctx = make_ctx(adx=[20.0, 26.0], di_plus=[30.0, 30.0], di_minus=[10.0, 10.0])
        signals = adx_rule(ctx, 1)
        assert _kinds(signals) == [SignalKind.ADX_TREND_START]
        assert signals[0].direction == SignalDirection.BULLISH
        assert "Aufwärts" in signals[0].description

    def test_jump_to_strong_fires_both(self, make_ctx):
        ctx = make_ctx(adx=[20.0, 45.0], di_plus=[10.0, 10.0], di_minus=[30.0, 30.0])
        signals = adx_rule(ctx, 1)
        assert _kinds(signals) == [SignalKind.ADX_TREND_START, SignalKind.ADX_TREND_STRONG]
        assert all(s.direction == SignalDirection.BEARISH for s in signals)
        assert signals[1].strength == SignalStrength.STRONG

    def test_neutral_without_di(self, make_ctx):
        signals = adx_rule(make_ctx(adx=[20.0, 26.0]), 1)
        assert signals[0].direction == SignalDirection.NEUTRAL
        assert "Unbestimmt" in signals[0].description


class TestMACrossRule:
    def test_disabled_by_default(self, make_ctx):
        assert ma_cross_rule(make_ctx(), 1) == []

    def test_golden_cross(self, make_ctx):
        ctx = make_ctx(ma_fast=[9.0, 11.0], ma_slow=[10.0, 10.0])
        signals = ma_cross_rule(ctx, 1)
        assert _kinds(signals) == [SignalKind.GOLDEN_CROSS]
        assert signals[0].strength == SignalStrength.STRONG
        assert signals[0].description == "Golden Cross - SMA 50 / SMA 200 kreuzt von unten"

    def test_death_cross(self, make_ctx):
        ctx = make_ctx(ma_fast=[11.0, 9.0], ma_slow=[10.0, 10.0])
        assert _kinds(ma_cross_rule(ctx, 1)) == [SignalKind.DEATH_CROSS]
