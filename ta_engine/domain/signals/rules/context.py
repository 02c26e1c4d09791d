"""
Signal evaluation context.

Computes every indicator series a rule may read once per detection call and
exposes them as plain lists of Optional[float] aligned with the bars.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..config.schema import SignalDetectionConfig
from ..indicators.momentum.macd import calculate_macd
from ..indicators.momentum.rsi import calculate_rsi
from ..indicators.momentum.stochastic import calculate_stochastic
from ..indicators.trend.adx import calculate_adx
from ..indicators.trend.sma import calculate_sma
from ..indicators.volatility.bollinger import calculate_bollinger
from ..models import Bar, SignalDirection, SignalKind, SignalStrength, TechnicalSignal
from ..series import values_of

Values = List[Optional[float]]


@dataclass(frozen=True)
class SignalContext:
    """Bars, configuration and indicator values for one detection call."""

    bars: Sequence[Bar]
    config: SignalDetectionConfig
    rsi: Values
    macd: Values
    macd_signal: Values
    bb_upper: Values
    bb_middle: Values
    bb_lower: Values
    stoch_k: Values
    stoch_d: Values
    adx: Values
    di_plus: Values
    di_minus: Values
    ma_fast: Optional[Values] = None
    ma_slow: Optional[Values] = None

    @classmethod
    def build(cls, bars: Sequence[Bar], config: SignalDetectionConfig) -> "SignalContext":
        macd = calculate_macd(bars, config.macd_fast, config.macd_slow, config.macd_signal)
        bollinger = calculate_bollinger(bars, config.bollinger_period, config.bollinger_std_dev)
        stochastic = calculate_stochastic(
            bars, config.stochastic_k, config.stochastic_k_slow, config.stochastic_d
        )
        adx = calculate_adx(bars, config.adx_period)

        ma_fast = ma_slow = None
        if config.ma_cross_enabled:
            ma_fast = values_of(calculate_sma(bars, config.ma_fast_period))
            ma_slow = values_of(calculate_sma(bars, config.ma_slow_period))

        return cls(
            bars=bars,
            config=config,
            rsi=values_of(calculate_rsi(bars, config.rsi_period)),
            macd=values_of(macd.macd),
            macd_signal=values_of(macd.signal),
            bb_upper=values_of(bollinger.upper),
            bb_middle=values_of(bollinger.middle),
            bb_lower=values_of(bollinger.lower),
            stoch_k=values_of(stochastic.k),
            stoch_d=values_of(stochastic.d),
            adx=values_of(adx.adx),
            di_plus=values_of(adx.di_plus),
            di_minus=values_of(adx.di_minus),
            ma_fast=ma_fast,
            ma_slow=ma_slow,
        )

    def signal(
        self,
        i: int,
        kind: SignalKind,
        direction: SignalDirection,
        strength: SignalStrength,
        indicator: str,
        description: str,
        value: Optional[float] = None,
    ) -> TechnicalSignal:
        """Signal at bar i, priced at its close."""
        bar = self.bars[i]
        return TechnicalSignal(
            kind=kind,
            direction=direction,
            strength=strength,
            date=bar.time,
            price=bar.close,
            indicator=indicator,
            description=description,
            value=value,
            bar_index=i,
        )


# A rule inspects bar i (always >= 1) and returns the signals it fires there
SignalRuleFn = Callable[[SignalContext, int], List[TechnicalSignal]]


def strength_if(condition: bool) -> SignalStrength:
    return SignalStrength.STRONG if condition else SignalStrength.MODERATE
