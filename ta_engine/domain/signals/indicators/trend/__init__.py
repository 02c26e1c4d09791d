"""
Trend indicators package.

Trend indicators identify the direction and strength of market trends.

Indicators:
- SMA: Simple Moving Average
- EMA: Exponential Moving Average
- ADX: Average Directional Index
- Ichimoku Cloud
"""

# Indicators will be auto-discovered by IndicatorRegistry
TREND_INDICATORS: list[str] = []
