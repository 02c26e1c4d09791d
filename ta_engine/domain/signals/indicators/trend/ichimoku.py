"""
Ichimoku Cloud Indicator.

Components (all computed at the bar they belong to, none shifted):
- Tenkan-sen: midpoint of the tenkan window
- Kijun-sen: midpoint of the kijun window
- Senkou Span A: (Tenkan + Kijun) / 2
- Senkou Span B: midpoint of the senkou_b window
- Chikou Span: close

Midpoint = (highest high + lowest low) / 2.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...models import Bar, IchimokuResult, IndicatorCategory
from ...series import closes, highs, lows, to_points, zip_with
from ..base import IndicatorBase, IndicatorParams, require_period


@dataclass(frozen=True)
class IchimokuParams(IndicatorParams):
    kind = "ichimoku"

    tenkan: int = 9
    kijun: int = 26
    senkou_b: int = 52

    def validate(self) -> None:
        require_period(self.kind, "tenkan", self.tenkan)
        require_period(self.kind, "kijun", self.kijun)
        require_period(self.kind, "senkou_b", self.senkou_b)


def midpoint_values(high: np.ndarray, low: np.ndarray, period: int) -> np.ndarray:
    n = len(high)
    mid = np.full(n, np.nan, dtype=np.float64)
    for i in range(period - 1, n):
        mid[i] = (np.max(high[i - period + 1 : i + 1]) + np.min(low[i - period + 1 : i + 1])) / 2
    return mid


def calculate_ichimoku(
    bars: Sequence[Bar],
    tenkan: int = 9,
    kijun: int = 26,
    senkou_b: int = 52,
) -> IchimokuResult:
    high = highs(bars)
    low = lows(bars)

    tenkan_line = to_points(bars, midpoint_values(high, low, tenkan))
    kijun_line = to_points(bars, midpoint_values(high, low, kijun))
    senkou_a_line = zip_with(tenkan_line, kijun_line, lambda t, k: (t + k) / 2)

    return IchimokuResult(
        tenkan=tenkan_line,
        kijun=kijun_line,
        senkou_a=senkou_a_line,
        senkou_b=to_points(bars, midpoint_values(high, low, senkou_b)),
        chikou=to_points(bars, closes(bars)),
    )


class IchimokuIndicator(IndicatorBase):
    """
    Ichimoku Kinko Hyo.

    Default Parameters:
        tenkan: 9
        kijun: 26
        senkou_b: 52
    """

    name = "ichimoku"
    category = IndicatorCategory.TREND
    required_fields = ["high", "low", "close"]
    params_type = IchimokuParams

    def _calculate(self, bars: Sequence[Bar], params: IchimokuParams) -> IchimokuResult:
        return calculate_ichimoku(bars, params.tenkan, params.kijun, params.senkou_b)

    def _warmup(self, params: IchimokuParams) -> int:
        return max(params.tenkan, params.kijun) - 1
