"""
Technical Analysis Engine - Indicators, candlestick patterns and signals.

This module provides:
- Bar / Point / result models: Value types shared by every calculation
- Indicator protocol and registry: Typed parameter sets, auto-discovery
- IndicatorEngine: Computes configured indicators for one or many securities
- detect_patterns: Candlestick pattern recognition
- detect_signals / get_all_signals: Threshold, crossover and divergence signals

Usage:
    from ta_engine.domain.signals import (
        calculate_rsi,
        detect_patterns,
        get_all_signals,
    )

    rsi = calculate_rsi(bars, period=14)
    patterns = detect_patterns(bars)
    signals = get_all_signals(bars)
"""

from .config import ConfigError, SignalDetectionConfig, ValidationResult
from .data import bars_from_frame, bars_from_records, bars_to_frame, convert_to_heikin_ashi
from .divergence import (
    detect_all_divergences,
    detect_divergence,
    divergence_to_signal,
    find_pivot_points,
)
from .indicator_engine import IndicatorEngine, config_key
from .indicators import (
    DEFAULT_INDICATOR_CONFIGS,
    Indicator,
    IndicatorBase,
    IndicatorParamError,
    IndicatorParams,
    IndicatorRegistry,
    IndicatorType,
    calculate_adx,
    calculate_atr,
    calculate_bollinger,
    calculate_ema,
    calculate_fibonacci,
    calculate_ichimoku,
    calculate_macd,
    calculate_obv,
    calculate_pivot_points,
    calculate_rsi,
    calculate_sma,
    calculate_stochastic,
    calculate_vwap,
    get_indicator_registry,
)
from .models import (
    ADXResult,
    Bar,
    BollingerResult,
    DivergenceIndicator,
    DivergenceSignal,
    DivergenceType,
    FibonacciLevel,
    FibonacciResult,
    HistogramColor,
    HistogramPoint,
    IchimokuResult,
    IndicatorCategory,
    LineSeries,
    MACDResult,
    PatternDirection,
    PatternKind,
    PatternMatch,
    PatternReliability,
    PivotPoint,
    PivotPointsResult,
    Point,
    SeriesSet,
    SignalDirection,
    SignalKind,
    SignalStrength,
    StochasticResult,
    SwingPoint,
    TechnicalSignal,
)
from .patterns import detect_patterns, get_latest_patterns, get_pattern_at_index
from .signal_detector import detect_signals, get_all_signals

__all__ = [
    # Models
    "Bar",
    "Point",
    "HistogramPoint",
    "HistogramColor",
    "LineSeries",
    "MACDResult",
    "BollingerResult",
    "StochasticResult",
    "ADXResult",
    "IchimokuResult",
    "PivotPointsResult",
    "SeriesSet",
    "FibonacciLevel",
    "FibonacciResult",
    "SwingPoint",
    "IndicatorCategory",
    "PatternKind",
    "PatternDirection",
    "PatternReliability",
    "PatternMatch",
    "SignalKind",
    "SignalDirection",
    "SignalStrength",
    "TechnicalSignal",
    "PivotPoint",
    "DivergenceType",
    "DivergenceIndicator",
    "DivergenceSignal",
    # Indicators
    "Indicator",
    "IndicatorBase",
    "IndicatorParams",
    "IndicatorParamError",
    "IndicatorType",
    "IndicatorRegistry",
    "IndicatorEngine",
    "DEFAULT_INDICATOR_CONFIGS",
    "config_key",
    "get_indicator_registry",
    "calculate_sma",
    "calculate_ema",
    "calculate_rsi",
    "calculate_macd",
    "calculate_bollinger",
    "calculate_atr",
    "calculate_vwap",
    "calculate_stochastic",
    "calculate_obv",
    "calculate_adx",
    "calculate_ichimoku",
    "calculate_pivot_points",
    "calculate_fibonacci",
    # Patterns
    "detect_patterns",
    "get_pattern_at_index",
    "get_latest_patterns",
    # Signals
    "SignalDetectionConfig",
    "ConfigError",
    "ValidationResult",
    "detect_signals",
    "get_all_signals",
    "detect_divergence",
    "detect_all_divergences",
    "divergence_to_signal",
    "find_pivot_points",
    # Data
    "bars_from_frame",
    "bars_from_records",
    "bars_to_frame",
    "convert_to_heikin_ashi",
]
