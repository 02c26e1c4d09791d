"""
Price-level indicators package.

Indicators:
- Pivot Points (standard, fibonacci, woodie)
- Fibonacci Retracements
"""

# Indicators will be auto-discovered by IndicatorRegistry
PATTERN_INDICATORS: list[str] = []
