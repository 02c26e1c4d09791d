"""
EMA (Exponential Moving Average) Indicator.

Multiplier 2 / (period + 1). The first value, at index period - 1, is the
SMA of the same window; afterwards:

    ema[i] = (close[i] - ema[i-1]) * multiplier + ema[i-1]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...models import Bar, IndicatorCategory, LineSeries
from ...series import closes, to_points
from ..base import IndicatorBase, IndicatorParams, require_period
from .sma import trailing_mean


@dataclass(frozen=True)
class EMAParams(IndicatorParams):
    kind = "ema"

    period: int = 20

    def validate(self) -> None:
        require_period(self.kind, "period", self.period)


def ema_values(values: np.ndarray, period: int) -> np.ndarray:
    """EMA over a float array, SMA-seeded, NaN during warmup."""
    n = len(values)
    ema = np.full(n, np.nan, dtype=np.float64)
    if n < period:
        return ema

    multiplier = 2 / (period + 1)
    ema[period - 1] = trailing_mean(values, period - 1, period)

    for i in range(period, n):
        ema[i] = (values[i] - ema[i - 1]) * multiplier + ema[i - 1]

    return ema


def calculate_ema(bars: Sequence[Bar], period: int = 20) -> LineSeries:
    """Exponential moving average of closes, aligned with bars."""
    return to_points(bars, ema_values(closes(bars), period))


class EMAIndicator(IndicatorBase):
    """
    Exponential Moving Average.

    Default Parameters:
        period: 20
    """

    name = "ema"
    category = IndicatorCategory.TREND
    required_fields = ["close"]
    params_type = EMAParams

    def _calculate(self, bars: Sequence[Bar], params: EMAParams) -> LineSeries:
        return calculate_ema(bars, params.period)

    def _warmup(self, params: EMAParams) -> int:
        return params.period - 1
