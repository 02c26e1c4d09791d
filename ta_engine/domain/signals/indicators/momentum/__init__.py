"""
Momentum indicators package.

Momentum indicators measure the rate of price change and identify
overbought/oversold conditions.

Indicators:
- RSI: Relative Strength Index
- MACD: Moving Average Convergence Divergence
- Stochastic Oscillator
"""

# Indicators will be auto-discovered by IndicatorRegistry
MOMENTUM_INDICATORS: list[str] = []
