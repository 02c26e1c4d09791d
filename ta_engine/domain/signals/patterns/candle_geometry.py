"""
Candle geometry helpers.

Body, range and wick measurements of single bars, plus the short-term trend
and average-body context the candlestick rules are judged against.
"""

from __future__ import annotations

from typing import Sequence

from ..models import Bar

# Bars averaged for the body-size reference
AVERAGE_BODY_PERIOD = 10

# Trend gate: close vs close `TREND_PERIOD` bars earlier, +/- 2%
TREND_PERIOD = 5
DOWNTREND_FACTOR = 0.98
UPTREND_FACTOR = 1.02


def body(bar: Bar) -> float:
    return abs(bar.close - bar.open)


def candle_range(bar: Bar) -> float:
    return bar.high - bar.low


def upper_wick(bar: Bar) -> float:
    return bar.high - max(bar.open, bar.close)


def lower_wick(bar: Bar) -> float:
    return min(bar.open, bar.close) - bar.low


def midpoint(bar: Bar) -> float:
    """Midpoint of the body."""
    return (bar.open + bar.close) / 2


def is_bullish(bar: Bar) -> bool:
    return bar.close > bar.open


def is_bearish(bar: Bar) -> bool:
    return bar.close < bar.open


def average_body(bars: Sequence[Bar], index: int, period: int = AVERAGE_BODY_PERIOD) -> float:
    """
    Mean body of the `period` bars before `index`.

    Falls back to the body of bars[index] itself when no earlier bar exists.
    """
    window = bars[max(0, index - period) : index]
    if not window:
        return body(bars[index])
    return sum(body(b) for b in window) / len(window)


def is_downtrend(bars: Sequence[Bar], index: int, period: int = TREND_PERIOD) -> bool:
    """Close at least 2% below the close `period` bars earlier."""
    if index < period:
        return False
    return bars[index].close < bars[index - period].close * DOWNTREND_FACTOR


def is_uptrend(bars: Sequence[Bar], index: int, period: int = TREND_PERIOD) -> bool:
    """Close at least 2% above the close `period` bars earlier."""
    if index < period:
        return False
    return bars[index].close > bars[index - period].close * UPTREND_FACTOR
