"""
RSI (Relative Strength Index) Indicator.

Measures the speed and magnitude of recent price changes to evaluate
overbought or oversold conditions.

Uses Wilder's smoothing: the first average gain/loss is the plain mean of the
first `period` changes, later averages are (avg * (period - 1) + x) / period.
A window without losses saturates at 100 - 100/101 instead of 100.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...models import Bar, IndicatorCategory, LineSeries
from ...series import closes, to_points
from ..base import IndicatorBase, IndicatorParams, require_period

# RS used when the average loss is zero
NO_LOSS_RS = 100.0


@dataclass(frozen=True)
class RSIParams(IndicatorParams):
    kind = "rsi"

    period: int = 14

    def validate(self) -> None:
        require_period(self.kind, "period", self.period)


def rsi_values(close: np.ndarray, period: int) -> np.ndarray:
    """
    Calculate RSI over a close array.

    Args:
        close: Close prices as float64 array
        period: RSI period

    Returns:
        RSI values as float64 array with NaN for the first `period` bars
    """
    n = len(close)
    rsi = np.full(n, np.nan, dtype=np.float64)
    if n < period + 1:
        return rsi

    # delta[0] is unused; changes start at bar 1
    delta = np.zeros(n, dtype=np.float64)
    delta[1:] = close[1:] - close[:-1]
    gains = np.where(delta > 0, delta, 0.0)
    losses = np.where(delta < 0, -delta, 0.0)

    avg_gain = float(np.sum(gains[1 : period + 1]) / period)
    avg_loss = float(np.sum(losses[1 : period + 1]) / period)

    for i in range(period, n):
        if i > period:
            avg_gain = (avg_gain * (period - 1) + gains[i]) / period
            avg_loss = (avg_loss * (period - 1) + losses[i]) / period

        rs = NO_LOSS_RS if avg_loss == 0 else avg_gain / avg_loss
        rsi[i] = 100.0 - 100.0 / (1.0 + rs)

    return rsi


def calculate_rsi(bars: Sequence[Bar], period: int = 14) -> LineSeries:
    """RSI of closes, aligned with bars (first value at index `period`)."""
    return to_points(bars, rsi_values(closes(bars), period))


class RSIIndicator(IndicatorBase):
    """
    Relative Strength Index indicator.

    Default Parameters:
        period: 14

    Output:
        Line series in [0, 100]
    """

    name = "rsi"
    category = IndicatorCategory.MOMENTUM
    required_fields = ["close"]
    params_type = RSIParams

    def _calculate(self, bars: Sequence[Bar], params: RSIParams) -> LineSeries:
        return calculate_rsi(bars, params.period)

    def _warmup(self, params: RSIParams) -> int:
        return params.period
