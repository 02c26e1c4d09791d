"""
Indicators package for technical analysis.

Provides:
- Indicator: Protocol for all indicator implementations
- IndicatorBase: Base class with common functionality
- IndicatorParams / IndicatorType: Typed parameter sets
- IndicatorRegistry: Auto-discovery and management of indicators
- calculate_* functions: Pure calculations over bars
"""

from .base import Indicator, IndicatorBase, IndicatorParamError, IndicatorParams
from .configs import (
    DEFAULT_INDICATOR_CONFIGS,
    PARAMS_BY_KIND,
    IndicatorType,
    params_from_dict,
    params_to_dict,
)
from .momentum.macd import MACDParams, calculate_macd
from .momentum.rsi import RSIParams, calculate_rsi
from .momentum.stochastic import StochasticParams, calculate_stochastic
from .pattern.fibonacci import FibonacciParams, calculate_fibonacci
from .pattern.pivot import PivotParams, calculate_pivot_points
from .registry import IndicatorRegistry, get_indicator_registry
from .trend.adx import ADXParams, calculate_adx
from .trend.ema import EMAParams, calculate_ema
from .trend.ichimoku import IchimokuParams, calculate_ichimoku
from .trend.sma import SMAParams, calculate_sma
from .volatility.atr import ATRParams, calculate_atr
from .volatility.bollinger import BollingerParams, calculate_bollinger
from .volume.obv import OBVParams, calculate_obv
from .volume.vwap import VWAPParams, calculate_vwap

__all__ = [
    "Indicator",
    "IndicatorBase",
    "IndicatorParamError",
    "IndicatorParams",
    "IndicatorType",
    "IndicatorRegistry",
    "get_indicator_registry",
    "DEFAULT_INDICATOR_CONFIGS",
    "PARAMS_BY_KIND",
    "params_from_dict",
    "params_to_dict",
    # Parameter sets
    "SMAParams",
    "EMAParams",
    "RSIParams",
    "MACDParams",
    "BollingerParams",
    "ATRParams",
    "VWAPParams",
    "StochasticParams",
    "OBVParams",
    "ADXParams",
    "IchimokuParams",
    "PivotParams",
    "FibonacciParams",
    # Calculations
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
]
