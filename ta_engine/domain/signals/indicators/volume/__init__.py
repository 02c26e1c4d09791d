"""
Volume indicators package.

Indicators:
- OBV: On-Balance Volume
- VWAP: Volume Weighted Average Price
"""

# Indicators will be auto-discovered by IndicatorRegistry
VOLUME_INDICATORS: list[str] = []
