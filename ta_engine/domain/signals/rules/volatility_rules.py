"""
Signal rules for volatility indicators.

Includes rules for:
- Bollinger squeeze: Bandwidth at its lowest over the squeeze period
- Bollinger breakout: Close crossing outside the upper/lower band
"""

from __future__ import annotations

from typing import List

from ..indicators.volatility.bollinger import bandwidth
from ..models import SignalDirection, SignalKind, SignalStrength, TechnicalSignal
from .context import SignalContext, strength_if


def _bandwidth_at(ctx: SignalContext, j: int):
    return bandwidth(ctx.bb_upper[j], ctx.bb_middle[j], ctx.bb_lower[j])


def bollinger_rule(ctx: SignalContext, i: int) -> List[TechnicalSignal]:
    upper, middle, lower = ctx.bb_upper[i], ctx.bb_middle[i], ctx.bb_lower[i]
    if upper is None or middle is None or lower is None:
        return []

    cfg = ctx.config
    signals: List[TechnicalSignal] = []

    width = _bandwidth_at(ctx, i)
    if width is not None:
        is_lowest = True
        for j in range(max(0, i - cfg.bollinger_squeeze_period), i):
            prev_width = _bandwidth_at(ctx, j)
            if prev_width is not None and prev_width < width:
                is_lowest = False
                break

        if is_lowest and width < cfg.squeeze_bandwidth:
            signals.append(ctx.signal(
                i,
                SignalKind.BOLLINGER_SQUEEZE,
                SignalDirection.NEUTRAL,
                strength_if(width < cfg.strong_squeeze_bandwidth),
                "Bollinger",
                "Bollinger Squeeze - Volatilitätsausbruch erwartet",
            ))

    close = ctx.bars[i].close
    prev_close = ctx.bars[i - 1].close
    prev_upper, prev_lower = ctx.bb_upper[i - 1], ctx.bb_lower[i - 1]

    if prev_upper is not None and close > upper and prev_close <= prev_upper:
        signals.append(ctx.signal(
            i,
            SignalKind.BOLLINGER_BREAKOUT_UP,
            SignalDirection.BULLISH,
            SignalStrength.MODERATE,
            "Bollinger",
            "Kurs bricht über oberes Bollinger Band aus",
        ))

    if prev_lower is not None and close < lower and prev_close >= prev_lower:
        signals.append(ctx.signal(
            i,
            SignalKind.BOLLINGER_BREAKOUT_DOWN,
            SignalDirection.BEARISH,
            SignalStrength.MODERATE,
            "Bollinger",
            "Kurs bricht unter unteres Bollinger Band aus",
        ))

    return signals
