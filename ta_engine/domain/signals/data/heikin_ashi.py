"""
Heikin-Ashi conversion.

Produces smoothed candles from regular OHLC bars:
- HA close: (open + high + low + close) / 4
- HA open: midpoint of the previous HA candle's body (first: (open + close) / 2)
- HA high/low: extremes of the raw high/low and the HA body
"""

from __future__ import annotations

from typing import List, Sequence

from ..models import Bar


def convert_to_heikin_ashi(bars: Sequence[Bar]) -> List[Bar]:
    """Return new Heikin-Ashi bars aligned with the input; volume is carried over."""
    result: List[Bar] = []

    for i, bar in enumerate(bars):
        ha_close = (bar.open + bar.high + bar.low + bar.close) / 4
        if i == 0:
            ha_open = (bar.open + bar.close) / 2
        else:
            prev = result[i - 1]
            ha_open = (prev.open + prev.close) / 2

        result.append(
            Bar(
                time=bar.time,
                open=ha_open,
                high=max(bar.high, ha_open, ha_close),
                low=min(bar.low, ha_open, ha_close),
                close=ha_close,
                volume=bar.volume,
            )
        )

    return result
