"""
ta-engine: technical-analysis core.

Indicators, candlestick patterns and trading signals computed from OHLC(V)
bars. The public API lives in ta_engine.domain.signals.
"""

__version__ = "0.1.0"
