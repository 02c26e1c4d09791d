"""Built-in signal rules, in evaluation order."""

from typing import List

from .context import SignalContext, SignalRuleFn
from .momentum_rules import macd_rule, rsi_rule, stochastic_rule
from .trend_rules import adx_rule, ma_cross_rule
from .volatility_rules import bollinger_rule

# Signals on the same bar keep this order in the output
SIGNAL_RULES: List[SignalRuleFn] = [
    rsi_rule,
    macd_rule,
    bollinger_rule,
    stochastic_rule,
    adx_rule,
    ma_cross_rule,
]

__all__ = [
    "SIGNAL_RULES",
    "SignalContext",
    "SignalRuleFn",
    "adx_rule",
    "bollinger_rule",
    "ma_cross_rule",
    "macd_rule",
    "rsi_rule",
    "stochastic_rule",
]
