"""
Signal rules for trend indicators.

Includes rules for:
- ADX: Trend start and strong trend threshold crossings, direction from DI
- Moving averages: Golden cross / death cross of the fast and slow SMA
"""

from __future__ import annotations

from typing import List

from ..models import SignalDirection, SignalKind, SignalStrength, TechnicalSignal
from .context import SignalContext

DIRECTION_LABELS = {
    SignalDirection.BULLISH: "Aufwärts",
    SignalDirection.BEARISH: "Abwärts",
    SignalDirection.NEUTRAL: "Unbestimmt",
}


def _di_direction(ctx: SignalContext, i: int) -> SignalDirection:
    di_plus, di_minus = ctx.di_plus[i], ctx.di_minus[i]
    if di_plus is None or di_minus is None:
        return SignalDirection.NEUTRAL
    return SignalDirection.BULLISH if di_plus > di_minus else SignalDirection.BEARISH


def adx_rule(ctx: SignalContext, i: int) -> List[TechnicalSignal]:
    value, prev = ctx.adx[i], ctx.adx[i - 1]
    if value is None or prev is None:
        return []

    cfg = ctx.config
    signals: List[TechnicalSignal] = []
    direction = _di_direction(ctx, i)

    if value >= cfg.adx_trend_threshold > prev:
        signals.append(ctx.signal(
            i,
            SignalKind.ADX_TREND_START,
            direction,
            SignalStrength.MODERATE,
            "ADX",
            f"Trend beginnt (ADX: {value:.1f}, {DIRECTION_LABELS[direction]})",
            value=value,
        ))

    if value >= cfg.adx_strong_threshold > prev:
        signals.append(ctx.signal(
            i,
            SignalKind.ADX_TREND_STRONG,
            direction,
            SignalStrength.STRONG,
            "ADX",
            f"Starker Trend (ADX: {value:.1f})",
            value=value,
        ))

    return signals


def ma_cross_rule(ctx: SignalContext, i: int) -> List[TechnicalSignal]:
    if ctx.ma_fast is None or ctx.ma_slow is None:
        return []

    fast, slow = ctx.ma_fast[i], ctx.ma_slow[i]
    prev_fast, prev_slow = ctx.ma_fast[i - 1], ctx.ma_slow[i - 1]
    if fast is None or slow is None or prev_fast is None or prev_slow is None:
        return []

    cfg = ctx.config
    label = f"SMA {cfg.ma_fast_period} / SMA {cfg.ma_slow_period}"

    if fast > slow and prev_fast <= prev_slow:
        return [ctx.signal(
            i,
            SignalKind.GOLDEN_CROSS,
            SignalDirection.BULLISH,
            SignalStrength.STRONG,
            "SMA",
            f"Golden Cross - {label} kreuzt von unten",
        )]

    if fast < slow and prev_fast >= prev_slow:
        return [ctx.signal(
            i,
            SignalKind.DEATH_CROSS,
            SignalDirection.BEARISH,
            SignalStrength.STRONG,
            "SMA",
            f"Death Cross - {label} kreuzt von oben",
        )]

    return []
