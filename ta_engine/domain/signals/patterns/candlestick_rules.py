"""
Candlestick pattern rules.

Each CandlestickRule pairs a pattern kind with its fixed metadata (display
name, German description, direction, reliability) and a predicate over a
CandleContext. CANDLESTICK_RULES lists them in evaluation order; the order
matters because the recognizer keeps the first match on reliability ties.

Includes rules for:
- Single candles: Doji, Hammer family, Spinning Top, Marubozu
- Two candles: Engulfing, Harami, Piercing Line / Dark Cloud Cover, Tweezers
- Three candles: Morning/Evening Star, Soldiers/Crows, Three Inside
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence

from ..models import Bar, PatternDirection, PatternKind, PatternReliability
from .candle_geometry import (
    average_body,
    body,
    candle_range,
    is_bearish,
    is_bullish,
    is_downtrend,
    is_uptrend,
    lower_wick,
    midpoint,
    upper_wick,
)


@dataclass(frozen=True)
class CandleContext:
    """Bars around index `i` with the reference values rules compare against."""

    bars: Sequence[Bar]
    i: int
    avg_body: float
    downtrend: bool
    uptrend: bool

    @classmethod
    def at(cls, bars: Sequence[Bar], i: int) -> "CandleContext":
        return cls(
            bars=bars,
            i=i,
            avg_body=average_body(bars, i),
            downtrend=is_downtrend(bars, i),
            uptrend=is_uptrend(bars, i),
        )

    @property
    def curr(self) -> Bar:
        return self.bars[self.i]

    @property
    def prev(self) -> Bar:
        return self.bars[self.i - 1]

    @property
    def first(self) -> Bar:
        return self.bars[self.i - 2]

    # Three-candle rules read the trend leading into the first candle
    @property
    def downtrend_at_first(self) -> bool:
        return is_downtrend(self.bars, self.i - 2)

    @property
    def uptrend_at_first(self) -> bool:
        return is_uptrend(self.bars, self.i - 2)


@dataclass(frozen=True)
class CandlestickRule:
    """A candlestick pattern and the predicate that recognizes it."""

    kind: PatternKind
    name: str
    description: str
    direction: PatternDirection
    reliability: PatternReliability
    span: int  # Number of candles ending at the current bar
    detect: Callable[[CandleContext], bool]


# =============================================================================
# Single candle predicates
# =============================================================================


def _hammer_shape(bar: Bar, avg_body: float) -> bool:
    b = body(bar)
    return lower_wick(bar) >= b * 2 and upper_wick(bar) <= b * 0.3 and b >= avg_body * 0.3


def _inverted_shape(bar: Bar, avg_body: float) -> bool:
    b = body(bar)
    return upper_wick(bar) >= b * 2 and lower_wick(bar) <= b * 0.3 and b >= avg_body * 0.3


def _doji(ctx: CandleContext) -> bool:
    return body(ctx.curr) < ctx.avg_body * 0.1 and candle_range(ctx.curr) > ctx.avg_body * 0.5


def _hammer(ctx: CandleContext) -> bool:
    return ctx.downtrend and _hammer_shape(ctx.curr, ctx.avg_body)


def _inverted_hammer(ctx: CandleContext) -> bool:
    return ctx.downtrend and _inverted_shape(ctx.curr, ctx.avg_body)


def _hanging_man(ctx: CandleContext) -> bool:
    return ctx.uptrend and _hammer_shape(ctx.curr, ctx.avg_body)


def _shooting_star(ctx: CandleContext) -> bool:
    return ctx.uptrend and _inverted_shape(ctx.curr, ctx.avg_body)


def _spinning_top(ctx: CandleContext) -> bool:
    b = body(ctx.curr)
    return b < ctx.avg_body * 0.5 and upper_wick(ctx.curr) > b and lower_wick(ctx.curr) > b


def _marubozu(ctx: CandleContext) -> bool:
    bar = ctx.curr
    rng = candle_range(bar)
    return (
        body(bar) > ctx.avg_body * 1.5
        and upper_wick(bar) < rng * 0.05
        and lower_wick(bar) < rng * 0.05
    )


def _marubozu_bullish(ctx: CandleContext) -> bool:
    return _marubozu(ctx) and is_bullish(ctx.curr)


def _marubozu_bearish(ctx: CandleContext) -> bool:
    # Colour split is bullish / not bullish
    return _marubozu(ctx) and not is_bullish(ctx.curr)


# =============================================================================
# Two candle predicates
# =============================================================================


def _engulfing_bullish(ctx: CandleContext) -> bool:
    prev, curr = ctx.prev, ctx.curr
    return (
        ctx.downtrend
        and is_bearish(prev)
        and is_bullish(curr)
        and curr.open < prev.close
        and curr.close > prev.open
    )


def _engulfing_bearish(ctx: CandleContext) -> bool:
    prev, curr = ctx.prev, ctx.curr
    return (
        ctx.uptrend
        and is_bullish(prev)
        and is_bearish(curr)
        and curr.open > prev.close
        and curr.close < prev.open
    )


def _inside_bullish(prev: Bar, curr: Bar) -> bool:
    """Bullish body held inside a bearish one at less than half its size."""
    return (
        is_bearish(prev)
        and is_bullish(curr)
        and curr.open > prev.close
        and curr.close < prev.open
        and body(curr) < body(prev) * 0.5
    )


def _inside_bearish(prev: Bar, curr: Bar) -> bool:
    return (
        is_bullish(prev)
        and is_bearish(curr)
        and curr.open < prev.close
        and curr.close > prev.open
        and body(curr) < body(prev) * 0.5
    )


def _harami_bullish(ctx: CandleContext) -> bool:
    return ctx.downtrend and _inside_bullish(ctx.prev, ctx.curr)


def _harami_bearish(ctx: CandleContext) -> bool:
    return ctx.uptrend and _inside_bearish(ctx.prev, ctx.curr)


def _piercing_line(ctx: CandleContext) -> bool:
    prev, curr = ctx.prev, ctx.curr
    return (
        ctx.downtrend
        and is_bearish(prev)
        and is_bullish(curr)
        and curr.open < prev.low
        and curr.close > midpoint(prev)
        and curr.close < prev.open
    )


def _dark_cloud_cover(ctx: CandleContext) -> bool:
    prev, curr = ctx.prev, ctx.curr
    return (
        ctx.uptrend
        and is_bullish(prev)
        and is_bearish(curr)
        and curr.open > prev.high
        and curr.close < midpoint(prev)
        and curr.close > prev.open
    )


def _tweezer_top(ctx: CandleContext) -> bool:
    prev, curr = ctx.prev, ctx.curr
    tolerance = candle_range(prev) * 0.05
    return (
        ctx.uptrend
        and is_bullish(prev)
        and is_bearish(curr)
        and abs(prev.high - curr.high) < tolerance
    )


def _tweezer_bottom(ctx: CandleContext) -> bool:
    prev, curr = ctx.prev, ctx.curr
    tolerance = candle_range(prev) * 0.05
    return (
        ctx.downtrend
        and is_bearish(prev)
        and is_bullish(curr)
        and abs(prev.low - curr.low) < tolerance
    )


# =============================================================================
# Three candle predicates
# =============================================================================


def _morning_star(ctx: CandleContext) -> bool:
    first, second, third = ctx.first, ctx.prev, ctx.curr
    return (
        ctx.downtrend_at_first
        and is_bearish(first)
        and body(first) > ctx.avg_body
        and body(second) < ctx.avg_body * 0.5
        and second.close < first.close
        and is_bullish(third)
        and body(third) > ctx.avg_body
        and third.close > midpoint(first)
    )


def _evening_star(ctx: CandleContext) -> bool:
    first, second, third = ctx.first, ctx.prev, ctx.curr
    return (
        ctx.uptrend_at_first
        and is_bullish(first)
        and body(first) > ctx.avg_body
        and body(second) < ctx.avg_body * 0.5
        and second.close > first.close
        and is_bearish(third)
        and body(third) > ctx.avg_body
        and third.close < midpoint(first)
    )


def _three_white_soldiers(ctx: CandleContext) -> bool:
    candles = (ctx.first, ctx.prev, ctx.curr)
    if not all(is_bullish(c) for c in candles):
        return False
    for earlier, later in zip(candles, candles[1:]):
        if not (later.open > earlier.open and later.close > earlier.close):
            return False
    return all(
        body(c) > ctx.avg_body * 0.7 and upper_wick(c) < body(c) * 0.3 for c in candles
    )


def _three_black_crows(ctx: CandleContext) -> bool:
    candles = (ctx.first, ctx.prev, ctx.curr)
    if not all(is_bearish(c) for c in candles):
        return False
    for earlier, later in zip(candles, candles[1:]):
        if not (later.open < earlier.open and later.close < earlier.close):
            return False
    return all(
        body(c) > ctx.avg_body * 0.7 and lower_wick(c) < body(c) * 0.3 for c in candles
    )


def _three_inside_up(ctx: CandleContext) -> bool:
    first, second, third = ctx.first, ctx.prev, ctx.curr
    return (
        ctx.downtrend_at_first
        and _inside_bullish(first, second)
        and is_bullish(third)
        and third.close > first.open
    )


def _three_inside_down(ctx: CandleContext) -> bool:
    first, second, third = ctx.first, ctx.prev, ctx.curr
    return (
        ctx.uptrend_at_first
        and _inside_bearish(first, second)
        and is_bearish(third)
        and third.close < first.open
    )


# =============================================================================
# Rule table
# =============================================================================

BULLISH = PatternDirection.BULLISH
BEARISH = PatternDirection.BEARISH
NEUTRAL = PatternDirection.NEUTRAL
HIGH = PatternReliability.HIGH
MEDIUM = PatternReliability.MEDIUM
LOW = PatternReliability.LOW

CANDLESTICK_RULES: List[CandlestickRule] = [
    # Single candle
    CandlestickRule(
        PatternKind.DOJI, "Doji",
        "Unentschlossenheit, mögliche Trendwende",
        NEUTRAL, MEDIUM, 1, _doji,
    ),
    CandlestickRule(
        PatternKind.HAMMER, "Hammer",
        "Bullisches Umkehrmuster nach Abwärtstrend",
        BULLISH, HIGH, 1, _hammer,
    ),
    CandlestickRule(
        PatternKind.INVERTED_HAMMER, "Umgekehrter Hammer",
        "Mögliche bullische Umkehr",
        BULLISH, MEDIUM, 1, _inverted_hammer,
    ),
    CandlestickRule(
        PatternKind.HANGING_MAN, "Hanging Man",
        "Bärisches Warnsignal nach Aufwärtstrend",
        BEARISH, MEDIUM, 1, _hanging_man,
    ),
    CandlestickRule(
        PatternKind.SHOOTING_STAR, "Shooting Star",
        "Bärisches Umkehrmuster nach Aufwärtstrend",
        BEARISH, HIGH, 1, _shooting_star,
    ),
    CandlestickRule(
        PatternKind.SPINNING_TOP, "Spinning Top",
        "Unentschlossenheit im Markt",
        NEUTRAL, LOW, 1, _spinning_top,
    ),
    CandlestickRule(
        PatternKind.MARUBOZU_BULLISH, "Bullish Marubozu",
        "Starke bullische Kerze ohne Dochte",
        BULLISH, HIGH, 1, _marubozu_bullish,
    ),
    CandlestickRule(
        PatternKind.MARUBOZU_BEARISH, "Bearish Marubozu",
        "Starke bärische Kerze ohne Dochte",
        BEARISH, HIGH, 1, _marubozu_bearish,
    ),
    # Two candles
    CandlestickRule(
        PatternKind.ENGULFING_BULLISH, "Bullish Engulfing",
        "Starkes bullisches Umkehrmuster",
        BULLISH, HIGH, 2, _engulfing_bullish,
    ),
    CandlestickRule(
        PatternKind.ENGULFING_BEARISH, "Bearish Engulfing",
        "Starkes bärisches Umkehrmuster",
        BEARISH, HIGH, 2, _engulfing_bearish,
    ),
    CandlestickRule(
        PatternKind.HARAMI_BULLISH, "Bullish Harami",
        "Mögliche bullische Umkehr",
        BULLISH, MEDIUM, 2, _harami_bullish,
    ),
    CandlestickRule(
        PatternKind.HARAMI_BEARISH, "Bearish Harami",
        "Mögliche bärische Umkehr",
        BEARISH, MEDIUM, 2, _harami_bearish,
    ),
    CandlestickRule(
        PatternKind.PIERCING_LINE, "Piercing Line",
        "Bullisches Umkehrmuster",
        BULLISH, HIGH, 2, _piercing_line,
    ),
    CandlestickRule(
        PatternKind.DARK_CLOUD_COVER, "Dark Cloud Cover",
        "Bärisches Umkehrmuster",
        BEARISH, HIGH, 2, _dark_cloud_cover,
    ),
    CandlestickRule(
        PatternKind.TWEEZER_TOP, "Tweezer Top",
        "Bärisches Umkehrmuster mit gleichem Hoch",
        BEARISH, MEDIUM, 2, _tweezer_top,
    ),
    CandlestickRule(
        PatternKind.TWEEZER_BOTTOM, "Tweezer Bottom",
        "Bullisches Umkehrmuster mit gleichem Tief",
        BULLISH, MEDIUM, 2, _tweezer_bottom,
    ),
    # Three candles
    CandlestickRule(
        PatternKind.MORNING_STAR, "Morning Star",
        "Starkes bullisches Umkehrmuster",
        BULLISH, HIGH, 3, _morning_star,
    ),
    CandlestickRule(
        PatternKind.EVENING_STAR, "Evening Star",
        "Starkes bärisches Umkehrmuster",
        BEARISH, HIGH, 3, _evening_star,
    ),
    CandlestickRule(
        PatternKind.THREE_WHITE_SOLDIERS, "Three White Soldiers",
        "Starkes bullisches Fortsetzungsmuster",
        BULLISH, HIGH, 3, _three_white_soldiers,
    ),
    CandlestickRule(
        PatternKind.THREE_BLACK_CROWS, "Three Black Crows",
        "Starkes bärisches Fortsetzungsmuster",
        BEARISH, HIGH, 3, _three_black_crows,
    ),
    CandlestickRule(
        PatternKind.THREE_INSIDE_UP, "Three Inside Up",
        "Bullisches Bestätigungsmuster",
        BULLISH, HIGH, 3, _three_inside_up,
    ),
    CandlestickRule(
        PatternKind.THREE_INSIDE_DOWN, "Three Inside Down",
        "Bärisches Bestätigungsmuster",
        BEARISH, HIGH, 3, _three_inside_down,
    ),
]
