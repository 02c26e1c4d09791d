"""
OBV (On-Balance Volume) Indicator.

Running volume total: added on an up close, subtracted on a down close,
unchanged on an equal close. Seeded with the first bar's volume; missing
volume counts as zero. Defined at every bar.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...models import Bar, IndicatorCategory, LineSeries
from ...series import closes, to_points, volumes
from ..base import IndicatorBase, IndicatorParams


@dataclass(frozen=True)
class OBVParams(IndicatorParams):
    kind = "obv"


def obv_values(close: np.ndarray, volume: np.ndarray) -> np.ndarray:
    n = len(close)
    obv = np.zeros(n, dtype=np.float64)
    if n == 0:
        return obv

    obv[0] = volume[0]
    for i in range(1, n):
        if close[i] > close[i - 1]:
            obv[i] = obv[i - 1] + volume[i]
        elif close[i] < close[i - 1]:
            obv[i] = obv[i - 1] - volume[i]
        else:
            obv[i] = obv[i - 1]

    return obv


def calculate_obv(bars: Sequence[Bar]) -> LineSeries:
    return to_points(bars, obv_values(closes(bars), volumes(bars)))


class OBVIndicator(IndicatorBase):
    """On-Balance Volume indicator (no parameters)."""

    name = "obv"
    category = IndicatorCategory.VOLUME
    required_fields = ["close", "volume"]
    params_type = OBVParams

    def _calculate(self, bars: Sequence[Bar], params: OBVParams) -> LineSeries:
        return calculate_obv(bars)

    def _warmup(self, params: OBVParams) -> int:
        return 0
