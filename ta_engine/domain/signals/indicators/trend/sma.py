"""
SMA (Simple Moving Average) Indicator.

Arithmetic mean of the trailing `period` closes. The first `period - 1`
points are None; no partial-window averages are produced.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...models import Bar, IndicatorCategory, LineSeries
from ...series import closes, to_points
from ..base import IndicatorBase, IndicatorParams, require_period


@dataclass(frozen=True)
class SMAParams(IndicatorParams):
    kind = "sma"

    period: int = 20

    def validate(self) -> None:
        require_period(self.kind, "period", self.period)


def trailing_mean(values: np.ndarray, end: int, period: int) -> float:
    """Mean of values[end - period + 1 : end + 1]."""
    return float(np.sum(values[end - period + 1 : end + 1]) / period)


def sma_values(values: np.ndarray, period: int) -> np.ndarray:
    """SMA over a float array, NaN during warmup."""
    n = len(values)
    sma = np.full(n, np.nan, dtype=np.float64)

    for i in range(period - 1, n):
        sma[i] = trailing_mean(values, i, period)

    return sma


def calculate_sma(bars: Sequence[Bar], period: int = 20) -> LineSeries:
    """Simple moving average of closes, aligned with bars."""
    return to_points(bars, sma_values(closes(bars), period))


class SMAIndicator(IndicatorBase):
    """
    Simple Moving Average.

    Default Parameters:
        period: 20
    """

    name = "sma"
    category = IndicatorCategory.TREND
    required_fields = ["close"]
    params_type = SMAParams

    def _calculate(self, bars: Sequence[Bar], params: SMAParams) -> LineSeries:
        return calculate_sma(bars, params.period)

    def _warmup(self, params: SMAParams) -> int:
        return params.period - 1
