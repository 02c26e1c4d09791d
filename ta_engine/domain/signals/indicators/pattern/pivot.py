"""
Pivot Points Indicator.

Pivot point and support/resistance levels for each bar, computed from the
previous bar's high, low and close. The first bar has no levels.

Methods:
- standard: P = (H + L + C) / 3, floor-trader R/S levels
- fibonacci: P = (H + L + C) / 3, R/S = P +/- {0.382, 0.618, 1.0} * (H - L)
- woodie: P = (H + L + 2C) / 4
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from ...models import Bar, IndicatorCategory, PivotPointsResult
from ...series import to_points
from ..base import IndicatorBase, IndicatorParams, IndicatorParamError

PIVOT_METHODS = ("standard", "fibonacci", "woodie")
LEVEL_NAMES = ("pivot", "r1", "r2", "r3", "s1", "s2", "s3")


@dataclass(frozen=True)
class PivotParams(IndicatorParams):
    kind = "pivot"

    method: str = "standard"

    def validate(self) -> None:
        if self.method not in PIVOT_METHODS:
            raise IndicatorParamError(
                self.kind, "method", self.method, f"must be one of {list(PIVOT_METHODS)}"
            )


def pivot_levels(high: float, low: float, close: float, method: str) -> Tuple[float, ...]:
    """(P, R1, R2, R3, S1, S2, S3) for one prior bar."""
    rng = high - low

    if method == "fibonacci":
        p = (high + low + close) / 3
        return (
            p,
            p + 0.382 * rng,
            p + 0.618 * rng,
            p + rng,
            p - 0.382 * rng,
            p - 0.618 * rng,
            p - rng,
        )

    if method == "woodie":
        p = (high + low + 2 * close) / 4
        r1 = 2 * p - low
        s1 = 2 * p - high
        return (p, r1, p + rng, r1 + rng, s1, p - rng, s1 - rng)

    p = (high + low + close) / 3
    return (
        p,
        2 * p - low,
        p + rng,
        high + 2 * (p - low),
        2 * p - high,
        p - rng,
        low - 2 * (high - p),
    )


def calculate_pivot_points(bars: Sequence[Bar], method: str = "standard") -> PivotPointsResult:
    """
    Calculate pivot levels for every bar from its predecessor.

    Raises:
        IndicatorParamError: If method is unknown
    """
    PivotParams(method=method)

    n = len(bars)
    columns: Dict[str, np.ndarray] = {
        name: np.full(n, np.nan, dtype=np.float64) for name in LEVEL_NAMES
    }

    for i in range(1, n):
        prev = bars[i - 1]
        levels = pivot_levels(prev.high, prev.low, prev.close, method)
        for name, value in zip(LEVEL_NAMES, levels):
            columns[name][i] = value

    series: Dict[str, List] = {name: to_points(bars, values) for name, values in columns.items()}
    return PivotPointsResult(**series)


class PivotPointsIndicator(IndicatorBase):
    """
    Pivot Points calculator.

    Default Parameters:
        method: "standard"  # standard, fibonacci, woodie
    """

    name = "pivot"
    category = IndicatorCategory.PATTERN
    required_fields = ["high", "low", "close"]
    params_type = PivotParams

    def _calculate(self, bars: Sequence[Bar], params: PivotParams) -> PivotPointsResult:
        return calculate_pivot_points(bars, params.method)

    def _warmup(self, params: PivotParams) -> int:
        return 1
