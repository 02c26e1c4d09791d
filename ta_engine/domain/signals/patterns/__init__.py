"""
Candlestick pattern recognition.

Provides:
- detect_patterns: Recent candlestick patterns, one per ending bar
- get_pattern_at_index / get_latest_patterns: Convenience lookups
- CANDLESTICK_RULES: Pattern rule table in evaluation order
"""

from .candlestick_rules import CANDLESTICK_RULES, CandleContext, CandlestickRule
from .recognizer import detect_patterns, get_latest_patterns, get_pattern_at_index

__all__ = [
    "CANDLESTICK_RULES",
    "CandleContext",
    "CandlestickRule",
    "detect_patterns",
    "get_latest_patterns",
    "get_pattern_at_index",
]
