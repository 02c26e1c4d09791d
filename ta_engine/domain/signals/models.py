"""
Technical Analysis Domain Models.

Defines core value types for the technical-analysis engine:
- Bar: One OHLC(V) period supplied by the caller
- Point / HistogramPoint: Index-aligned indicator datum (None = insufficient history)
- Multi-series results: MACD, Bollinger, Stochastic, ADX, Ichimoku, Pivot Points
- PatternMatch: Candlestick pattern recognized over 1-3 bars
- TechnicalSignal / DivergenceSignal: Threshold, crossover and divergence signals
- Enums: Categories, directions, reliabilities, strengths, signal kinds
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd


class IndicatorCategory(Enum):
    """Category of an indicator, used for registry grouping."""

    TREND = "trend"
    MOMENTUM = "momentum"
    VOLATILITY = "volatility"
    VOLUME = "volume"
    PATTERN = "pattern"


class HistogramColor(Enum):
    """Sign tag for histogram bars (display only, never used in calculations)."""

    POSITIVE = "#26a69a"
    NEGATIVE = "#ef5350"


class PatternKind(Enum):
    """Candlestick patterns known to the recognizer."""

    # Single candle
    DOJI = "doji"
    HAMMER = "hammer"
    INVERTED_HAMMER = "inverted_hammer"
    HANGING_MAN = "hanging_man"
    SHOOTING_STAR = "shooting_star"
    SPINNING_TOP = "spinning_top"
    MARUBOZU_BULLISH = "marubozu_bullish"
    MARUBOZU_BEARISH = "marubozu_bearish"
    # Two candles
    ENGULFING_BULLISH = "engulfing_bullish"
    ENGULFING_BEARISH = "engulfing_bearish"
    HARAMI_BULLISH = "harami_bullish"
    HARAMI_BEARISH = "harami_bearish"
    PIERCING_LINE = "piercing_line"
    DARK_CLOUD_COVER = "dark_cloud_cover"
    TWEEZER_TOP = "tweezer_top"
    TWEEZER_BOTTOM = "tweezer_bottom"
    # Three candles
    MORNING_STAR = "morning_star"
    EVENING_STAR = "evening_star"
    THREE_WHITE_SOLDIERS = "three_white_soldiers"
    THREE_BLACK_CROWS = "three_black_crows"
    THREE_INSIDE_UP = "three_inside_up"
    THREE_INSIDE_DOWN = "three_inside_down"


class PatternDirection(Enum):
    """Directional bias of a candlestick pattern."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class PatternReliability(Enum):
    """Reliability grade of a candlestick pattern."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Ordering used for deduplication (higher wins)."""
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class SignalKind(Enum):
    """Kind of technical signal."""

    RSI_OVERSOLD = "rsi_oversold"
    RSI_OVERBOUGHT = "rsi_overbought"
    MACD_BULLISH_CROSS = "macd_bullish_cross"
    MACD_BEARISH_CROSS = "macd_bearish_cross"
    BOLLINGER_SQUEEZE = "bollinger_squeeze"
    BOLLINGER_BREAKOUT_UP = "bollinger_breakout_up"
    BOLLINGER_BREAKOUT_DOWN = "bollinger_breakout_down"
    STOCHASTIC_OVERSOLD = "stochastic_oversold"
    STOCHASTIC_OVERBOUGHT = "stochastic_overbought"
    STOCHASTIC_BULLISH_CROSS = "stochastic_bullish_cross"
    STOCHASTIC_BEARISH_CROSS = "stochastic_bearish_cross"
    ADX_TREND_START = "adx_trend_start"
    ADX_TREND_STRONG = "adx_trend_strong"
    GOLDEN_CROSS = "golden_cross"
    DEATH_CROSS = "death_cross"
    DIVERGENCE_BULLISH = "divergence_bullish"
    DIVERGENCE_BEARISH = "divergence_bearish"


class SignalDirection(Enum):
    """Direction of a technical signal."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class SignalStrength(Enum):
    """Strength grade of a technical signal."""

    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class DivergenceType(Enum):
    """Type of divergence between price and indicator."""

    BULLISH = "bullish"  # Price lower low, indicator higher low
    BEARISH = "bearish"  # Price higher high, indicator lower high


class DivergenceIndicator(Enum):
    """Indicator channels scanned for divergences."""

    RSI = "rsi"
    MACD = "macd"
    OBV = "obv"
    STOCHASTIC = "stochastic"

    @property
    def display_name(self) -> str:
        return {
            "rsi": "RSI",
            "macd": "MACD",
            "obv": "OBV",
            "stochastic": "Stochastic",
        }[self.value]


# =============================================================================
# Bars and points
# =============================================================================


@dataclass(frozen=True)
class Bar:
    """
    One OHLC(V) period.

    Callers own ordering (ascending by time) and sanity (low <= open/close <= high);
    neither is validated here.
    """

    time: Any
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "open": self.open,
            "high": self.high,
            "low": self.low,
            "close": self.close,
            "volume": self.volume,
        }


@dataclass(frozen=True)
class Point:
    """Line datum aligned with the bar at the same index."""

    time: Any
    value: Optional[float]

    def to_dict(self) -> Dict[str, Any]:
        return {"time": self.time, "value": self.value}


@dataclass(frozen=True)
class HistogramPoint(Point):
    """Histogram datum with a sign-derived color tag."""

    color: Optional[HistogramColor] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "time": self.time,
            "value": self.value,
            "color": self.color.value if self.color else None,
        }


LineSeries = List[Point]


def _series_frame(series: Dict[str, List[Point]]) -> pd.DataFrame:
    """Build a DataFrame (NaN for None) indexed by bar time."""
    first = next(iter(series.values()), [])
    index = [p.time for p in first]
    columns = {
        name: np.array(
            [np.nan if p.value is None else p.value for p in points], dtype=np.float64
        )
        for name, points in series.items()
    }
    return pd.DataFrame(columns, index=index)


class SeriesSet:
    """Mixin for results holding several index-aligned series."""

    def series(self) -> Dict[str, List[Point]]:
        """Named mapping of series role to points."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    def to_frame(self) -> pd.DataFrame:
        """Series as DataFrame columns (NaN marks insufficient history)."""
        return _series_frame(self.series())

    def to_dict(self) -> Dict[str, Any]:
        return {name: [p.to_dict() for p in points] for name, points in self.series().items()}


def series_to_frame(series: LineSeries, name: str = "value") -> pd.DataFrame:
    """Single line series as a one-column DataFrame."""
    return _series_frame({name: series})


# =============================================================================
# Multi-series results
# =============================================================================


@dataclass(frozen=True)
class MACDResult(SeriesSet):
    macd: List[Point]
    signal: List[Point]
    histogram: List[HistogramPoint]


@dataclass(frozen=True)
class BollingerResult(SeriesSet):
    upper: List[Point]
    middle: List[Point]
    lower: List[Point]


@dataclass(frozen=True)
class StochasticResult(SeriesSet):
    k: List[Point]  # %K (smoothed fast line)
    d: List[Point]  # %D (signal line)


@dataclass(frozen=True)
class ADXResult(SeriesSet):
    adx: List[Point]  # Trend strength (0-100)
    di_plus: List[Point]
    di_minus: List[Point]


@dataclass(frozen=True)
class IchimokuResult(SeriesSet):
    """
    Ichimoku lines at the bar they are computed on.

    senkou_a/senkou_b are conventionally drawn kijun periods ahead and chikou
    kijun periods behind; that displacement is left to the renderer.
    """

    tenkan: List[Point]
    kijun: List[Point]
    senkou_a: List[Point]
    senkou_b: List[Point]
    chikou: List[Point]


@dataclass(frozen=True)
class PivotPointsResult(SeriesSet):
    pivot: List[Point]
    r1: List[Point]
    r2: List[Point]
    r3: List[Point]
    s1: List[Point]
    s2: List[Point]
    s3: List[Point]


@dataclass(frozen=True)
class FibonacciLevel:
    level: float  # Percent, e.g. 61.8
    price: float
    label: str

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "price": self.price, "label": self.label}


@dataclass(frozen=True)
class SwingPoint:
    price: float
    time: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"price": self.price, "time": self.time}


@dataclass(frozen=True)
class FibonacciResult:
    """Retracement levels between the swing extremes of the lookback window."""

    levels: List[FibonacciLevel]
    swing_high: Optional[SwingPoint]
    swing_low: Optional[SwingPoint]

    @property
    def is_uptrend(self) -> bool:
        """True when levels retrace down from the swing high."""
        if len(self.levels) < 2:
            return False
        return self.levels[0].price > self.levels[-1].price

    def to_dict(self) -> Dict[str, Any]:
        return {
            "levels": [lvl.to_dict() for lvl in self.levels],
            "swing_high": self.swing_high.to_dict() if self.swing_high else None,
            "swing_low": self.swing_low.to_dict() if self.swing_low else None,
        }


# =============================================================================
# Patterns and signals
# =============================================================================


@dataclass(frozen=True)
class PatternMatch:
    """
    A candlestick pattern spanning bars[start_index..end_index].

    Has no identity beyond (end_index, kind); a fresh list is built on every
    detection call.
    """

    kind: PatternKind
    name: str
    start_index: int
    end_index: int
    direction: PatternDirection
    reliability: PatternReliability
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.kind.value,
            "name": self.name,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "direction": self.direction.value,
            "reliability": self.reliability.value,
            "description": self.description,
        }


@dataclass(frozen=True)
class TechnicalSignal:
    """
    Signal produced at a single bar.

    Not deduplicated across indicators: an RSI and a Stochastic signal on
    the same bar are both kept.
    """

    kind: SignalKind
    direction: SignalDirection
    strength: SignalStrength
    date: Any
    price: float
    indicator: str
    description: str
    value: Optional[float] = None
    bar_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "direction": self.direction.value,
            "strength": self.strength.value,
            "date": self.date,
            "price": self.price,
            "indicator": self.indicator,
            "value": self.value,
            "description": self.description,
            "bar_index": self.bar_index,
        }

    def __str__(self) -> str:
        direction_symbol = {"bullish": "▲", "bearish": "▼", "neutral": "●"}[self.direction.value]
        return (
            f"{direction_symbol} [{self.strength.value.upper()}] "
            f"{self.indicator} @ {self.date} - {self.description}"
        )


@dataclass(frozen=True)
class PivotPoint:
    """Local extremum of an indicator series (used for divergence detection)."""

    index: int
    price: float
    indicator_value: float
    kind: str  # "high" or "low"


@dataclass(frozen=True)
class DivergenceSignal:
    """Price/indicator divergence between two consecutive pivots."""

    kind: DivergenceType
    indicator: DivergenceIndicator
    start_date: Any
    end_date: Any
    price_start: float
    price_end: float
    indicator_value_start: float
    indicator_value_end: float
    confidence: float  # 0-1
    start_index: int
    end_index: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "indicator": self.indicator.value,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "price_start": self.price_start,
            "price_end": self.price_end,
            "indicator_start": self.indicator_value_start,
            "indicator_end": self.indicator_value_end,
            "confidence": self.confidence,
            "start_index": self.start_index,
            "end_index": self.end_index,
        }
