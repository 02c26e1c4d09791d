"""
Technical signal detection.

Evaluates the built-in rules (RSI, MACD, Bollinger, Stochastic, ADX and the
optional moving-average cross) over the most recent bars, and merges in
divergence signals for get_all_signals.

Every call recomputes the indicator series from the bars it is given; there
is no state between calls.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ta_engine.utils.logging_setup import get_logger

from .config.schema import SignalDetectionConfig
from .divergence.price_divergence import detect_all_divergences, divergence_to_signal
from .models import Bar, TechnicalSignal
from .rules import SIGNAL_RULES, SignalContext

logger = get_logger(__name__)


def _sort_by_bar(signals: List[TechnicalSignal]) -> List[TechnicalSignal]:
    # sorted() is stable, so signals on one bar keep rule order
    return sorted(signals, key=lambda s: s.bar_index if s.bar_index is not None else -1, reverse=True)


def detect_signals(
    bars: Sequence[Bar],
    config: Optional[SignalDetectionConfig] = None,
) -> List[TechnicalSignal]:
    """
    Detect threshold and crossover signals on the most recent bars.

    Only the last min(signal_window, n - min_bars) bars are examined; each
    rule compares bar i with bar i - 1.

    Args:
        bars: Bars in ascending time order
        config: Thresholds and periods (defaults if None)

    Returns:
        Signals sorted by bar index descending; empty with fewer than
        config.min_bars bars
    """
    cfg = config or SignalDetectionConfig()
    n = len(bars)
    if n < cfg.min_bars:
        logger.debug(f"Signal scan skipped: {n} bars < {cfg.min_bars}")
        return []

    window = min(cfg.signal_window, n - cfg.min_bars)
    ctx = SignalContext.build(bars, cfg)

    signals: List[TechnicalSignal] = []
    for i in range(max(1, n - window), n):
        for rule in SIGNAL_RULES:
            signals.extend(rule(ctx, i))

    logger.debug(f"Detected {len(signals)} signals over the last {window} of {n} bars")
    return _sort_by_bar(signals)


def get_all_signals(
    bars: Sequence[Bar],
    config: Optional[SignalDetectionConfig] = None,
) -> List[TechnicalSignal]:
    """
    Rule signals plus divergence signals, most recent bar first.

    Divergences are priced at the close of their ending bar and scanned with
    config.divergence_lookback.
    """
    cfg = config or SignalDetectionConfig()
    signals = detect_signals(bars, cfg)

    for divergence in detect_all_divergences(bars, cfg.divergence_lookback):
        price = bars[divergence.end_index].close
        signals.append(divergence_to_signal(divergence, price))

    return _sort_by_bar(signals)
