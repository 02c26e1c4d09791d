"""
ADX (Average Directional Index) Indicator.

Measures trend strength regardless of direction, with +DI/-DI giving the
direction.

Calculation (Wilder):
- TR, +DM and -DM from bar 1 onward
- Smoothed sums seeded with the sum of the first `period` values, then
  smoothed = smoothed - smoothed / period + new
- DI = 100 * DM / TR (first at index `period`)
- DX = 100 * |+DI - -DI| / (+DI + -DI)
- ADX = mean of the first `period` DX values (index 2 * period - 1), then
  Wilder-smoothed
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from ...models import ADXResult, Bar, IndicatorCategory
from ...series import closes, highs, lows, to_points
from ..base import IndicatorBase, IndicatorParams, require_period


@dataclass(frozen=True)
class ADXParams(IndicatorParams):
    kind = "adx"

    period: int = 14

    def validate(self) -> None:
        require_period(self.kind, "period", self.period)


def _directional_index(dm: float, tr: float) -> float:
    return 0.0 if tr == 0 else 100.0 * dm / tr


def adx_values(
    high: np.ndarray,
    low: np.ndarray,
    close: np.ndarray,
    period: int,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Raw arrays (adx, di_plus, di_minus) with NaN during warmup."""
    n = len(close)
    adx = np.full(n, np.nan, dtype=np.float64)
    di_plus = np.full(n, np.nan, dtype=np.float64)
    di_minus = np.full(n, np.nan, dtype=np.float64)
    if n < period + 1:
        return adx, di_plus, di_minus

    # Index i holds the movement from bar i - 1 to bar i; index 0 unused
    tr = np.zeros(n, dtype=np.float64)
    plus_dm = np.zeros(n, dtype=np.float64)
    minus_dm = np.zeros(n, dtype=np.float64)
    for i in range(1, n):
        tr[i] = max(
            high[i] - low[i],
            abs(high[i] - close[i - 1]),
            abs(low[i] - close[i - 1]),
        )
        up_move = high[i] - high[i - 1]
        down_move = low[i - 1] - low[i]
        plus_dm[i] = up_move if up_move > down_move and up_move > 0 else 0.0
        minus_dm[i] = down_move if down_move > up_move and down_move > 0 else 0.0

    smoothed_tr = float(np.sum(tr[1 : period + 1]))
    smoothed_plus = float(np.sum(plus_dm[1 : period + 1]))
    smoothed_minus = float(np.sum(minus_dm[1 : period + 1]))

    dx_count = 0
    dx_sum = 0.0
    for i in range(period, n):
        if i > period:
            smoothed_tr = smoothed_tr - smoothed_tr / period + tr[i]
            smoothed_plus = smoothed_plus - smoothed_plus / period + plus_dm[i]
            smoothed_minus = smoothed_minus - smoothed_minus / period + minus_dm[i]

        plus_di = _directional_index(smoothed_plus, smoothed_tr)
        minus_di = _directional_index(smoothed_minus, smoothed_tr)
        di_plus[i] = plus_di
        di_minus[i] = minus_di

        di_sum = plus_di + minus_di
        dx = 0.0 if di_sum == 0 else 100.0 * abs(plus_di - minus_di) / di_sum
        dx_count += 1

        if dx_count < period:
            dx_sum += dx
        elif dx_count == period:
            adx[i] = (dx_sum + dx) / period
        else:
            adx[i] = (adx[i - 1] * (period - 1) + dx) / period

    return adx, di_plus, di_minus


def calculate_adx(bars: Sequence[Bar], period: int = 14) -> ADXResult:
    """
    Calculate ADX with +DI and -DI.

    Returns:
        ADXResult; DI from index `period`, ADX from index 2 * period - 1.
        Fewer than period + 1 bars yields all-None series.
    """
    adx, di_plus, di_minus = adx_values(highs(bars), lows(bars), closes(bars), period)
    return ADXResult(
        adx=to_points(bars, adx),
        di_plus=to_points(bars, di_plus),
        di_minus=to_points(bars, di_minus),
    )


class ADXIndicator(IndicatorBase):
    """
    Average Directional Index indicator.

    Default Parameters:
        period: 14

    Output:
        ADXResult (adx, di_plus, di_minus), all in [0, 100]
    """

    name = "adx"
    category = IndicatorCategory.TREND
    required_fields = ["high", "low", "close"]
    params_type = ADXParams

    def _calculate(self, bars: Sequence[Bar], params: ADXParams) -> ADXResult:
        return calculate_adx(bars, params.period)

    def _warmup(self, params: ADXParams) -> int:
        return 2 * params.period - 1
