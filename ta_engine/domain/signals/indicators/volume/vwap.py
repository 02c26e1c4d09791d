"""
VWAP (Volume Weighted Average Price) Indicator.

Cumulative typical price * volume over cumulative volume, anchored at the
first bar. Bars with missing or zero volume get no value and do not move the
running totals.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from ...models import Bar, IndicatorCategory, LineSeries, Point
from ..base import IndicatorBase, IndicatorParams


@dataclass(frozen=True)
class VWAPParams(IndicatorParams):
    kind = "vwap"


def calculate_vwap(bars: Sequence[Bar]) -> LineSeries:
    cumulative_tpv = 0.0
    cumulative_volume = 0.0
    result: List[Point] = []

    for bar in bars:
        if not bar.volume:
            result.append(Point(time=bar.time, value=None))
            continue

        typical_price = (bar.high + bar.low + bar.close) / 3
        cumulative_tpv += typical_price * bar.volume
        cumulative_volume += bar.volume
        value = cumulative_tpv / cumulative_volume if cumulative_volume > 0 else None
        result.append(Point(time=bar.time, value=value))

    return result


class VWAPIndicator(IndicatorBase):
    """Volume Weighted Average Price indicator (no parameters)."""

    name = "vwap"
    category = IndicatorCategory.VOLUME
    required_fields = ["high", "low", "close", "volume"]
    params_type = VWAPParams

    def _calculate(self, bars: Sequence[Bar], params: VWAPParams) -> LineSeries:
        return calculate_vwap(bars)

    def _warmup(self, params: VWAPParams) -> int:
        return 0
