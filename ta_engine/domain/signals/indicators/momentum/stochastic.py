"""
Stochastic Oscillator Indicator.

Compares the close to the high-low range over a lookback window.

Components:
- Raw %K: 100 * (close - lowest low) / (highest high - lowest low), 50 on a
  flat window
- %K: SMA(k_slow) of raw %K
- %D: SMA(d_period) of %K
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...models import Bar, IndicatorCategory, StochasticResult
from ...series import closes, highs, lows, to_points
from ..base import IndicatorBase, IndicatorParams, require_period

FLAT_RANGE_K = 50.0


@dataclass(frozen=True)
class StochasticParams(IndicatorParams):
    kind = "stochastic"

    k_period: int = 14
    k_slow: int = 3
    d_period: int = 3

    def validate(self) -> None:
        require_period(self.kind, "k_period", self.k_period)
        require_period(self.kind, "k_slow", self.k_slow)
        require_period(self.kind, "d_period", self.d_period)


def _trailing_available_mean(values: np.ndarray, end: int, period: int) -> float:
    """Mean of the non-NaN values among the last `period` up to `end`."""
    window = values[max(0, end - period + 1) : end + 1]
    window = window[~np.isnan(window)]
    if len(window) == 0:
        return np.nan
    return float(np.sum(window) / len(window))


def stochastic_values(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    k_period: int,
    k_slow: int,
    d_period: int,
):
    """Raw arrays (k, d) with NaN during warmup."""
    n = len(close)
    raw_k = np.full(n, np.nan, dtype=np.float64)
    k = np.full(n, np.nan, dtype=np.float64)
    d = np.full(n, np.nan, dtype=np.float64)

    for i in range(k_period - 1, n):
        highest = np.max(high[i - k_period + 1 : i + 1])
        lowest = np.min(low[i - k_period + 1 : i + 1])
        rng = highest - lowest
        raw_k[i] = FLAT_RANGE_K if rng == 0 else 100.0 * (close[i] - lowest) / rng

    k_start = k_period - 1 + k_slow - 1
    for i in range(k_start, n):
        k[i] = _trailing_available_mean(raw_k, i, k_slow)

    for i in range(k_start + d_period - 1, n):
        d[i] = _trailing_available_mean(k, i, d_period)

    return k, d


def calculate_stochastic(
    bars: Sequence[Bar],
    k_period: int = 14,
    k_slow: int = 3,
    d_period: int = 3,
) -> StochasticResult:
    """
    Calculate the slow stochastic oscillator.

    Returns:
        StochasticResult with %K from index k_period + k_slow - 2 and %D
        d_period - 1 bars later
    """
    k, d = stochastic_values(
        highs(bars), lows(bars), closes(bars), k_period, k_slow, d_period
    )
    return StochasticResult(k=to_points(bars, k), d=to_points(bars, d))


class StochasticIndicator(IndicatorBase):
    """
    Stochastic Oscillator.

    Default Parameters:
        k_period: 14
        k_slow: 3
        d_period: 3
    """

    name = "stochastic"
    category = IndicatorCategory.MOMENTUM
    required_fields = ["high", "low", "close"]
    params_type = StochasticParams

    def _calculate(self, bars: Sequence[Bar], params: StochasticParams) -> StochasticResult:
        return calculate_stochastic(bars, params.k_period, params.k_slow, params.d_period)

    def _warmup(self, params: StochasticParams) -> int:
        return params.k_period - 1 + params.k_slow - 1
