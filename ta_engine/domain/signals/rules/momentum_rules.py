"""
Signal rules for momentum indicators.

Includes rules for:
- RSI: Entering the oversold/overbought zone
- MACD: Bullish/bearish signal-line crossovers
- Stochastic: Zone entries and %K/%D crossovers
"""

from __future__ import annotations

from typing import List

from ..models import SignalDirection, SignalKind, TechnicalSignal
from .context import SignalContext, strength_if

# %K/%D crossovers only count on their side of the midline
STOCHASTIC_MIDLINE = 50.0


def rsi_rule(ctx: SignalContext, i: int) -> List[TechnicalSignal]:
    value, prev = ctx.rsi[i], ctx.rsi[i - 1]
    if value is None or prev is None:
        return []

    cfg = ctx.config
    signals: List[TechnicalSignal] = []

    if value <= cfg.rsi_oversold < prev:
        signals.append(ctx.signal(
            i,
            SignalKind.RSI_OVERSOLD,
            SignalDirection.BULLISH,
            strength_if(value < cfg.rsi_strong_oversold),
            "RSI",
            f"RSI ist überverkauft ({value:.1f})",
            value=value,
        ))

    if value >= cfg.rsi_overbought > prev:
        signals.append(ctx.signal(
            i,
            SignalKind.RSI_OVERBOUGHT,
            SignalDirection.BEARISH,
            strength_if(value > cfg.rsi_strong_overbought),
            "RSI",
            f"RSI ist überkauft ({value:.1f})",
            value=value,
        ))

    return signals


def macd_rule(ctx: SignalContext, i: int) -> List[TechnicalSignal]:
    macd, signal = ctx.macd[i], ctx.macd_signal[i]
    prev_macd, prev_signal = ctx.macd[i - 1], ctx.macd_signal[i - 1]
    if macd is None or signal is None or prev_macd is None or prev_signal is None:
        return []

    signals: List[TechnicalSignal] = []

    # Crossing on the far side of zero counts as strong
    if macd > signal and prev_macd <= prev_signal:
        signals.append(ctx.signal(
            i,
            SignalKind.MACD_BULLISH_CROSS,
            SignalDirection.BULLISH,
            strength_if(macd < 0),
            "MACD",
            "MACD kreuzt Signal-Linie von unten (Kaufsignal)",
        ))

    if macd < signal and prev_macd >= prev_signal:
        signals.append(ctx.signal(
            i,
            SignalKind.MACD_BEARISH_CROSS,
            SignalDirection.BEARISH,
            strength_if(macd > 0),
            "MACD",
            "MACD kreuzt Signal-Linie von oben (Verkaufssignal)",
        ))

    return signals


def stochastic_rule(ctx: SignalContext, i: int) -> List[TechnicalSignal]:
    k, d = ctx.stoch_k[i], ctx.stoch_d[i]
    prev_k, prev_d = ctx.stoch_k[i - 1], ctx.stoch_d[i - 1]
    if k is None or d is None:
        return []

    cfg = ctx.config
    signals: List[TechnicalSignal] = []

    if prev_k is not None:
        if k <= cfg.stochastic_oversold < prev_k:
            signals.append(ctx.signal(
                i,
                SignalKind.STOCHASTIC_OVERSOLD,
                SignalDirection.BULLISH,
                strength_if(k < cfg.stochastic_strong_oversold),
                "Stochastic",
                f"Stochastic überverkauft (%K: {k:.1f})",
                value=k,
            ))

        if k >= cfg.stochastic_overbought > prev_k:
            signals.append(ctx.signal(
                i,
                SignalKind.STOCHASTIC_OVERBOUGHT,
                SignalDirection.BEARISH,
                strength_if(k > cfg.stochastic_strong_overbought),
                "Stochastic",
                f"Stochastic überkauft (%K: {k:.1f})",
                value=k,
            ))

    if prev_k is None or prev_d is None:
        return signals

    if k > d and prev_k <= prev_d and k < STOCHASTIC_MIDLINE:
        signals.append(ctx.signal(
            i,
            SignalKind.STOCHASTIC_BULLISH_CROSS,
            SignalDirection.BULLISH,
            strength_if(k < cfg.stochastic_oversold),
            "Stochastic",
            "%K kreuzt %D von unten (Kaufsignal)",
        ))

    if k < d and prev_k >= prev_d and k > STOCHASTIC_MIDLINE:
        signals.append(ctx.signal(
            i,
            SignalKind.STOCHASTIC_BEARISH_CROSS,
            SignalDirection.BEARISH,
            strength_if(k > cfg.stochastic_overbought),
            "Stochastic",
            "%K kreuzt %D von oben (Verkaufssignal)",
        ))

    return signals
