"""
Candlestick Pattern Recognizer.

Scans the most recent bars for the patterns in CANDLESTICK_RULES and reports
at most one pattern per ending bar, most recent first.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ta_engine.utils.logging_setup import get_logger

from ..models import Bar, PatternMatch
from .candlestick_rules import CANDLESTICK_RULES, CandleContext, CandlestickRule

logger = get_logger(__name__)

# Fewer bars than this yields no patterns
MIN_BARS = 10

# Only the last SCAN_BARS bars are examined (fewer when history is short)
SCAN_BARS = 20
SCAN_RESERVE = 5


def _scan_start(n: int) -> int:
    return n - min(SCAN_BARS, n - SCAN_RESERVE)


def _to_match(rule: CandlestickRule, end_index: int) -> PatternMatch:
    return PatternMatch(
        kind=rule.kind,
        name=rule.name,
        start_index=end_index - rule.span + 1,
        end_index=end_index,
        direction=rule.direction,
        reliability=rule.reliability,
        description=rule.description,
    )


def detect_patterns(bars: Sequence[Bar]) -> List[PatternMatch]:
    """
    Detect candlestick patterns in the recent bars.

    Rules are evaluated in table order at every scanned bar. When several
    patterns end on the same bar, the most reliable one is kept; on equal
    reliability the first one found stays.

    Args:
        bars: Bars in ascending time order

    Returns:
        Matches sorted by end_index descending; empty with fewer than 10 bars
    """
    n = len(bars)
    if n < MIN_BARS:
        logger.debug(f"Pattern scan skipped: {n} bars < {MIN_BARS}")
        return []

    best: Dict[int, PatternMatch] = {}
    for i in range(_scan_start(n), n):
        ctx = CandleContext.at(bars, i)

        for rule in CANDLESTICK_RULES:
            if i < rule.span - 1 or not rule.detect(ctx):
                continue

            match = _to_match(rule, i)
            existing = best.get(i)
            if existing is None or match.reliability.rank > existing.reliability.rank:
                best[i] = match

    patterns = sorted(best.values(), key=lambda m: m.end_index, reverse=True)
    logger.debug(f"Detected {len(patterns)} candlestick patterns in {n} bars")
    return patterns


def get_pattern_at_index(bars: Sequence[Bar], index: int) -> Optional[PatternMatch]:
    """Pattern ending at `index`, if any."""
    for match in detect_patterns(bars):
        if match.end_index == index:
            return match
    return None


def get_latest_patterns(bars: Sequence[Bar], count: int = 5) -> List[PatternMatch]:
    """The `count` most recent patterns."""
    return detect_patterns(bars)[:count]
