"""
Price Divergence Detection.

Detects divergences between closing prices and indicator values:
- Bullish Divergence: Price makes lower low, indicator makes higher low
- Bearish Divergence: Price makes higher high, indicator makes lower high

Pivots are local extremes of the indicator series; price is read at the same
bars. Only consecutive pivots of the same kind are compared.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ta_engine.utils.logging_setup import get_logger

from ..indicators.momentum.macd import calculate_macd
from ..indicators.momentum.rsi import calculate_rsi
from ..indicators.momentum.stochastic import calculate_stochastic
from ..indicators.volume.obv import calculate_obv
from ..models import (
    Bar,
    DivergenceIndicator,
    DivergenceSignal,
    DivergenceType,
    Point,
    PivotPoint,
    SignalDirection,
    SignalKind,
    SignalStrength,
    TechnicalSignal,
)

logger = get_logger(__name__)

# Bars on each side a pivot must dominate
PIVOT_WINDOW = 3

# Divergences at or below this confidence are dropped
MIN_CONFIDENCE = 0.3
CONFIDENCE_SCALE = 5.0

# Fewer bars than this yields no divergences in detect_all_divergences
MIN_BARS = 30


def find_pivot_points(
    prices: Sequence[float],
    indicator_values: Sequence[Optional[float]],
    window: int = PIVOT_WINDOW,
) -> List[PivotPoint]:
    """
    Find local highs and lows of an indicator series.

    A bar is a pivot high when its indicator value is strictly greater than
    every value within `window` bars on both sides (pivot low: strictly
    less). A missing value anywhere in that span disqualifies the bar.

    Args:
        prices: Close prices aligned with indicator_values
        indicator_values: Indicator series (None = no value)
        window: Bars compared on each side

    Returns:
        Pivots in index order; indexes are positions in the given sequences
    """
    pivots: List[PivotPoint] = []
    n = len(prices)

    for i in range(window, n - window):
        value = indicator_values[i]
        if value is None:
            continue

        neighbours = [indicator_values[i - j] for j in range(1, window + 1)]
        neighbours += [indicator_values[i + j] for j in range(1, window + 1)]
        if any(v is None for v in neighbours):
            continue

        if all(value > v for v in neighbours):
            pivots.append(PivotPoint(index=i, price=prices[i], indicator_value=value, kind="high"))
        if all(value < v for v in neighbours):
            pivots.append(PivotPoint(index=i, price=prices[i], indicator_value=value, kind="low"))

    return pivots


def _confidence(price_delta: float, indicator_delta: float) -> float:
    return min(1.0, (price_delta + indicator_delta) * CONFIDENCE_SCALE)


def _indicator_base(value: float) -> float:
    # Zero-valued pivots (e.g. OBV at its seed) are measured in absolute units
    return abs(value) or 1.0


def _signed_base(value: float) -> float:
    # Negative highs flip the sign so a falling indicator lowers confidence
    return value or 1.0


def _to_divergence(
    bars: Sequence[Bar],
    kind: DivergenceType,
    indicator: DivergenceIndicator,
    prev: PivotPoint,
    curr: PivotPoint,
    confidence: float,
) -> DivergenceSignal:
    return DivergenceSignal(
        kind=kind,
        indicator=indicator,
        start_date=bars[prev.index].time,
        end_date=bars[curr.index].time,
        price_start=prev.price,
        price_end=curr.price,
        indicator_value_start=prev.indicator_value,
        indicator_value_end=curr.indicator_value,
        confidence=confidence,
        start_index=prev.index,
        end_index=curr.index,
    )


def detect_divergence(
    bars: Sequence[Bar],
    indicator_series: Sequence[Point],
    indicator: DivergenceIndicator,
    lookback: int = 20,
) -> List[DivergenceSignal]:
    """
    Detect regular divergences between closes and one indicator.

    Args:
        bars: Bars in ascending time order
        indicator_series: Indicator points aligned with bars
        indicator: Which indicator the series belongs to
        lookback: Pivots are searched in the last 3 * lookback bars and
            pivot pairs further than lookback bars apart are ignored

    Returns:
        Bearish divergences followed by bullish ones, each in pivot order;
        empty when there are fewer than 2 * lookback bars
    """
    n = len(bars)
    if n < lookback * 2:
        return []

    start = max(0, n - lookback * 3)
    prices = [bar.close for bar in bars[start:]]
    values = [p.value for p in indicator_series[start:]]

    pivots = [
        PivotPoint(
            index=p.index + start,
            price=p.price,
            indicator_value=p.indicator_value,
            kind=p.kind,
        )
        for p in find_pivot_points(prices, values, PIVOT_WINDOW)
    ]
    highs = [p for p in pivots if p.kind == "high"]
    lows = [p for p in pivots if p.kind == "low"]

    divergences: List[DivergenceSignal] = []

    for prev, curr in zip(highs, highs[1:]):
        if curr.index - prev.index > lookback:
            continue
        if curr.price > prev.price and curr.indicator_value < prev.indicator_value:
            price_delta = (curr.price - prev.price) / prev.price
            indicator_delta = (
                prev.indicator_value - curr.indicator_value
            ) / _signed_base(prev.indicator_value)
            confidence = _confidence(price_delta, indicator_delta)
            if confidence > MIN_CONFIDENCE:
                divergences.append(_to_divergence(
                    bars, DivergenceType.BEARISH, indicator, prev, curr, confidence
                ))

    for prev, curr in zip(lows, lows[1:]):
        if curr.index - prev.index > lookback:
            continue
        if curr.price < prev.price and curr.indicator_value > prev.indicator_value:
            price_delta = (prev.price - curr.price) / prev.price
            indicator_delta = (
                curr.indicator_value - prev.indicator_value
            ) / _indicator_base(prev.indicator_value)
            confidence = _confidence(price_delta, indicator_delta)
            if confidence > MIN_CONFIDENCE:
                divergences.append(_to_divergence(
                    bars, DivergenceType.BULLISH, indicator, prev, curr, confidence
                ))

    return divergences


def detect_all_divergences(bars: Sequence[Bar], lookback: int = 20) -> List[DivergenceSignal]:
    """
    Detect divergences against RSI(14), the MACD line, OBV and Stochastic %K.

    Returns:
        All divergences sorted by end_index descending (stable)
    """
    if len(bars) < MIN_BARS:
        logger.debug(f"Divergence scan skipped: {len(bars)} bars < {MIN_BARS}")
        return []

    divergences: List[DivergenceSignal] = []
    divergences += detect_divergence(bars, calculate_rsi(bars, 14), DivergenceIndicator.RSI, lookback)
    divergences += detect_divergence(
        bars, calculate_macd(bars, 12, 26, 9).macd, DivergenceIndicator.MACD, lookback
    )
    divergences += detect_divergence(bars, calculate_obv(bars), DivergenceIndicator.OBV, lookback)
    divergences += detect_divergence(
        bars, calculate_stochastic(bars, 14, 3, 3).k, DivergenceIndicator.STOCHASTIC, lookback
    )

    divergences.sort(key=lambda d: d.end_index, reverse=True)
    logger.debug(f"Detected {len(divergences)} divergences in {len(bars)} bars")
    return divergences


def divergence_to_signal(divergence: DivergenceSignal, price: float) -> TechnicalSignal:
    """Express a divergence as a TechnicalSignal at its ending bar."""
    name = divergence.indicator.display_name

    if divergence.confidence > 0.7:
        strength = SignalStrength.STRONG
    elif divergence.confidence > 0.5:
        strength = SignalStrength.MODERATE
    else:
        strength = SignalStrength.WEAK

    if divergence.kind == DivergenceType.BULLISH:
        kind = SignalKind.DIVERGENCE_BULLISH
        direction = SignalDirection.BULLISH
        description = f"Bullische Divergenz bei {name} - Preis fällt, Indikator steigt"
    else:
        kind = SignalKind.DIVERGENCE_BEARISH
        direction = SignalDirection.BEARISH
        description = f"Bärische Divergenz bei {name} - Preis steigt, Indikator fällt"

    return TechnicalSignal(
        kind=kind,
        direction=direction,
        strength=strength,
        date=divergence.end_date,
        price=price,
        indicator=name,
        description=description,
        bar_index=divergence.end_index,
    )
