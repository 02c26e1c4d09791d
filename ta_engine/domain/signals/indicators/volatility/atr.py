"""
ATR (Average True Range) Indicator.

Measures market volatility by decomposing the entire range of an asset
price for a period, with Wilder's smoothing.

True Range = max(high - low, |high - prev_close|, |low - prev_close|)
The first bar has no previous close, so its TR is high - low and it is left
out of the seed average.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...models import Bar, IndicatorCategory, LineSeries
from ...series import closes, highs, lows, to_points
from ..base import IndicatorBase, IndicatorParams, require_period


@dataclass(frozen=True)
class ATRParams(IndicatorParams):
    kind = "atr"

    period: int = 14

    def validate(self) -> None:
        require_period(self.kind, "period", self.period)


def true_range(high: np.ndarray, low: np.ndarray, close: np.ndarray) -> np.ndarray:
    """True range per bar; tr[0] = high[0] - low[0]."""
    n = len(close)
    tr = np.zeros(n, dtype=np.float64)
    if n == 0:
        return tr

    tr[0] = high[0] - low[0]
    for i in range(1, n):
        tr[i] = max(
            high[i] - low[i],
            abs(high[i] - close[i - 1]),
            abs(low[i] - close[i - 1]),
        )
    return tr


def atr_values(high: np.ndarray, low: np.ndarray, close: np.ndarray, period: int) -> np.ndarray:
    n = len(close)
    atr = np.full(n, np.nan, dtype=np.float64)
    if n < 2 or n <= period:
        return atr

    tr = true_range(high, low, close)
    atr[period] = float(np.sum(tr[1 : period + 1]) / period)
    for i in range(period + 1, n):
        atr[i] = (atr[i - 1] * (period - 1) + tr[i]) / period

    return atr


def calculate_atr(bars: Sequence[Bar], period: int = 14) -> LineSeries:
    """ATR aligned with bars; first value at index `period`."""
    return to_points(bars, atr_values(highs(bars), lows(bars), closes(bars), period))


class ATRIndicator(IndicatorBase):
    """
    Average True Range indicator.

    Default Parameters:
        period: 14

    Output:
        Non-negative line series
    """

    name = "atr"
    category = IndicatorCategory.VOLATILITY
    required_fields = ["high", "low", "close"]
    params_type = ATRParams

    def _calculate(self, bars: Sequence[Bar], params: ATRParams) -> LineSeries:
        return calculate_atr(bars, params.period)

    def _warmup(self, params: ATRParams) -> int:
        return params.period
