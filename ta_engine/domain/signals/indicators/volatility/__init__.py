"""
Volatility indicators package.

Indicators:
- ATR: Average True Range
- Bollinger Bands
"""

# Indicators will be auto-discovered by IndicatorRegistry
VOLATILITY_INDICATORS: list[str] = []
