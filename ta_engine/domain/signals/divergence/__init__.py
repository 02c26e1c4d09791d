"""
Divergence Detection Package.

Provides tools for detecting regular (bullish/bearish) divergences between
price and RSI, MACD, OBV or Stochastic, and converting them to signals.
"""

from .price_divergence import (
    detect_all_divergences,
    detect_divergence,
    divergence_to_signal,
    find_pivot_points,
)

__all__ = [
    "detect_all_divergences",
    "detect_divergence",
    "divergence_to_signal",
    "find_pivot_points",
]
