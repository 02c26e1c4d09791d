"""
Fibonacci Retracement Indicator.

Finds the swing high (first bar with the highest high) and swing low (first
bar with the lowest low) in the lookback window and lays retracement levels
between them. When the low came first the move is an uptrend and levels
retrace down from the high; otherwise they extend up from the low.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ...models import Bar, FibonacciLevel, FibonacciResult, IndicatorCategory, SwingPoint
from ..base import IndicatorBase, IndicatorParams, require_period

FIB_RATIOS = (0.0, 0.236, 0.382, 0.5, 0.618, 0.786, 1.0)


@dataclass(frozen=True)
class FibonacciParams(IndicatorParams):
    kind = "fibonacci"

    lookback: int = 50

    def validate(self) -> None:
        require_period(self.kind, "lookback", self.lookback)


def calculate_fibonacci(bars: Sequence[Bar], lookback: int = 50) -> FibonacciResult:
    """
    Calculate retracement levels over the last `lookback` bars.

    Returns:
        FibonacciResult; no levels and no swing points for empty input
    """
    recent = list(bars[-min(lookback, len(bars)) :]) if bars else []
    if not recent:
        return FibonacciResult(levels=[], swing_high=None, swing_low=None)

    high_idx = 0
    low_idx = 0
    for i, bar in enumerate(recent):
        if bar.high > recent[high_idx].high:
            high_idx = i
        if bar.low < recent[low_idx].low:
            low_idx = i

    swing_high = SwingPoint(price=recent[high_idx].high, time=recent[high_idx].time)
    swing_low = SwingPoint(price=recent[low_idx].low, time=recent[low_idx].time)
    is_uptrend = low_idx < high_idx
    rng = swing_high.price - swing_low.price

    levels: List[FibonacciLevel] = []
    for ratio in FIB_RATIOS:
        price = swing_high.price - ratio * rng if is_uptrend else swing_low.price + ratio * rng
        levels.append(
            FibonacciLevel(level=ratio * 100, price=price, label=f"{ratio * 100:.1f}%")
        )

    return FibonacciResult(levels=levels, swing_high=swing_high, swing_low=swing_low)


class FibonacciIndicator(IndicatorBase):
    """
    Fibonacci retracement levels.

    Default Parameters:
        lookback: 50
    """

    name = "fibonacci"
    category = IndicatorCategory.PATTERN
    required_fields = ["high", "low"]
    params_type = FibonacciParams

    def _calculate(self, bars: Sequence[Bar], params: FibonacciParams) -> FibonacciResult:
        return calculate_fibonacci(bars, params.lookback)

    def _warmup(self, params: FibonacciParams) -> int:
        return 0
