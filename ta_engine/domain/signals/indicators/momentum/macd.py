"""
MACD (Moving Average Convergence Divergence) Indicator.

Trend-following momentum indicator showing the relationship between two
EMAs of price.

Components:
- MACD Line: Fast EMA - Slow EMA
- Signal Line: EMA of the MACD line, seeded with the mean of its first
  `signal` values
- Histogram: MACD - Signal, tagged with a sign color
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from ...models import Bar, HistogramColor, HistogramPoint, IndicatorCategory, MACDResult
from ...series import closes, to_array, to_points, zip_with
from ..base import IndicatorBase, IndicatorParams, require_period
from ..trend.ema import ema_values


@dataclass(frozen=True)
class MACDParams(IndicatorParams):
    kind = "macd"

    fast: int = 12
    slow: int = 26
    signal: int = 9

    def validate(self) -> None:
        require_period(self.kind, "fast", self.fast)
        require_period(self.kind, "slow", self.slow)
        require_period(self.kind, "signal", self.signal)


def histogram_color(value: float) -> HistogramColor:
    return HistogramColor.POSITIVE if value >= 0 else HistogramColor.NEGATIVE


def calculate_macd(
    bars: Sequence[Bar],
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> MACDResult:
    """
    Calculate MACD line, signal line and histogram.

    Args:
        bars: Bars in ascending time order
        fast: Fast EMA period
        slow: Slow EMA period
        signal: Signal EMA period

    Returns:
        MACDResult with three series aligned with bars
    """
    close = closes(bars)
    fast_line = to_points(bars, ema_values(close, fast))
    slow_line = to_points(bars, ema_values(close, slow))
    macd_line = zip_with(fast_line, slow_line, operator.sub)

    # The valid MACD values form a suffix; the signal EMA runs over it only.
    macd_arr = to_array(macd_line)
    signal_arr = np.full(len(macd_arr), np.nan, dtype=np.float64)
    valid = np.flatnonzero(~np.isnan(macd_arr))
    if len(valid) > 0:
        start = int(valid[0])
        signal_arr[start:] = ema_values(macd_arr[start:], signal)
    signal_line = to_points(bars, signal_arr)

    histogram: List[HistogramPoint] = []
    for point in zip_with(macd_line, signal_line, operator.sub):
        color = histogram_color(point.value) if point.value is not None else None
        histogram.append(HistogramPoint(time=point.time, value=point.value, color=color))

    return MACDResult(macd=macd_line, signal=signal_line, histogram=histogram)


class MACDIndicator(IndicatorBase):
    """
    MACD indicator.

    Default Parameters:
        fast: 12
        slow: 26
        signal: 9

    Output:
        MACDResult (macd, signal, histogram)
    """

    name = "macd"
    category = IndicatorCategory.MOMENTUM
    required_fields = ["close"]
    params_type = MACDParams

    def _calculate(self, bars: Sequence[Bar], params: MACDParams) -> MACDResult:
        return calculate_macd(bars, params.fast, params.slow, params.signal)

    def _warmup(self, params: MACDParams) -> int:
        return max(params.fast, params.slow) - 1 + params.signal - 1
