"""
Bollinger Bands Indicator.

Volatility bands placed above and below a simple moving average.

Components:
- Middle Band: SMA(period)
- Upper Band: Middle + std_dev * population standard deviation
- Lower Band: Middle - std_dev * population standard deviation

Bandwidth ((upper - lower) / middle) is what squeeze detection reads.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ...models import Bar, BollingerResult, IndicatorCategory
from ...series import closes, to_points
from ..base import IndicatorBase, IndicatorParams, require_period, require_positive
from ..trend.sma import sma_values


@dataclass(frozen=True)
class BollingerParams(IndicatorParams):
    kind = "bollinger"

    period: int = 20
    std_dev: float = 2.0

    def validate(self) -> None:
        require_period(self.kind, "period", self.period)
        require_positive(self.kind, "std_dev", self.std_dev)


def bandwidth(upper: Optional[float], middle: Optional[float], lower: Optional[float]) -> Optional[float]:
    """(upper - lower) / middle, None when any band is missing or middle is 0."""
    if upper is None or middle is None or lower is None or middle == 0:
        return None
    return (upper - lower) / middle


def calculate_bollinger(
    bars: Sequence[Bar],
    period: int = 20,
    std_dev: float = 2.0,
) -> BollingerResult:
    """
    Calculate Bollinger Bands.

    Args:
        bars: Bars in ascending time order
        period: SMA and deviation window
        std_dev: Band width in standard deviations

    Returns:
        BollingerResult with lower <= middle <= upper wherever present
    """
    close = closes(bars)
    n = len(close)
    middle = sma_values(close, period)
    upper = np.full(n, np.nan, dtype=np.float64)
    lower = np.full(n, np.nan, dtype=np.float64)

    for i in range(period - 1, n):
        window = close[i - period + 1 : i + 1]
        std = math.sqrt(float(np.sum((window - middle[i]) ** 2)) / period)
        upper[i] = middle[i] + std_dev * std
        lower[i] = middle[i] - std_dev * std

    return BollingerResult(
        upper=to_points(bars, upper),
        middle=to_points(bars, middle),
        lower=to_points(bars, lower),
    )


class BollingerIndicator(IndicatorBase):
    """
    Bollinger Bands indicator.

    Default Parameters:
        period: 20
        std_dev: 2.0
    """

    name = "bollinger"
    category = IndicatorCategory.VOLATILITY
    required_fields = ["close"]
    params_type = BollingerParams

    def _calculate(self, bars: Sequence[Bar], params: BollingerParams) -> BollingerResult:
        return calculate_bollinger(bars, params.period, params.std_dev)

    def _warmup(self, params: BollingerParams) -> int:
        return params.period - 1
