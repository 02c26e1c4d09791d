"""Tests for candlestick pattern recognition."""

from datetime import datetime, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ta_engine.domain.signals.models import (
    Bar,
    PatternDirection,
    PatternKind,
    PatternReliability,
)
from ta_engine.domain.signals.patterns import (
    detect_patterns,
    get_latest_patterns,
    get_pattern_at_index,
)
from ta_engine.domain.signals.patterns.candle_geometry import (
    average_body,
    body,
    is_downtrend,
    is_uptrend,
    lower_wick,
    upper_wick,
)
from ta_engine.domain.signals.patterns.candlestick_rules import (
    CANDLESTICK_RULES,
    CandleContext,
)

RULES_BY_KIND = {rule.kind: rule for rule in CANDLESTICK_RULES}


def _downtrend_rows():
    # 15 bars closing 120, 118, ..., 92 with body 1
    return [(c + 1, c + 1.5, c - 0.5, c) for c in (120 - 2 * i for i in range(15))]


def _flat_rows(count: int):
    rows = []
    for i in range(count):
        rows.append((100.5, 101, 99, 99.5) if i % 2 == 0 else (99.5, 101, 99, 100.5))
    return rows


class TestGeometry:
    def test_measurements(self):
        bar = Bar(time=0, open=10, high=15, low=7, close=12)
        assert body(bar) == 2
        assert upper_wick(bar) == 3
        assert lower_wick(bar) == 3

    def test_average_body_falls_back_to_own_body(self, bars_from_rows):
        bars = bars_from_rows([(10, 12, 9, 11)])
        assert average_body(bars, 0) == 1

    def test_average_body_uses_previous_bars(self, bars_from_rows):
        bars = bars_from_rows([(10, 12, 9, 11), (10, 14, 9, 13), (0, 100, 0, 100)])
        assert average_body(bars, 2) == pytest.approx(2.0)

    def test_trend_gates(self, bars_from_rows):
        bars = bars_from_rows(_downtrend_rows())
        assert is_downtrend(bars, 14)
        assert not is_uptrend(bars, 14)
        assert not is_downtrend(bars, 4)


class TestRuleTable:
    def test_all_kinds_covered_once(self):
        assert [r.kind for r in CANDLESTICK_RULES] == list(PatternKind)
        assert len(RULES_BY_KIND) == 22

    def test_package_exports(self):
        from ta_engine.domain.signals import patterns

        assert set(patterns.__all__) == {
            "CANDLESTICK_RULES",
            "CandleContext",
            "CandlestickRule",
            "detect_patterns",
            "get_latest_patterns",
            "get_pattern_at_index",
        }

    def test_spans(self):
        assert RULES_BY_KIND[PatternKind.HAMMER].span == 1
        assert RULES_BY_KIND[PatternKind.ENGULFING_BULLISH].span == 2
        assert RULES_BY_KIND[PatternKind.MORNING_STAR].span == 3

    def test_doji_predicate(self, bars_from_rows):
        bars = bars_from_rows(_flat_rows(10) + [(100, 102, 98, 100.02)])
        assert RULES_BY_KIND[PatternKind.DOJI].detect(CandleContext.at(bars, 10))


class TestScenarios:
    def test_hammer_after_downtrend(self, bars_from_rows):
        bars = bars_from_rows(_downtrend_rows() + [(92, 93, 80, 93)])
        match = get_pattern_at_index(bars, 15)

        assert match is not None
        assert match.kind == PatternKind.HAMMER
        assert match.direction == PatternDirection.BULLISH
        assert match.reliability == PatternReliability.HIGH
        assert match.start_index == match.end_index == 15
        assert match.name == "Hammer"

    def test_three_white_soldiers(self, bars_from_rows):
        soldiers = [(100, 106, 99.5, 105.5), (102, 110, 101.5, 109.5), (105, 114, 104.5, 113.5)]
        bars = bars_from_rows(_flat_rows(10) + soldiers)
        match = get_pattern_at_index(bars, 12)

        assert match is not None
        assert match.kind == PatternKind.THREE_WHITE_SOLDIERS
        assert match.direction == PatternDirection.BULLISH
        assert match.reliability == PatternReliability.HIGH
        assert (match.start_index, match.end_index) == (10, 12)

    def test_higher_reliability_replaces_earlier_match(self, bars_from_rows):
        rising = [(c - 0.5, c + 0.2, c - 0.7, c) for c in (100.0 + i for i in range(11))]
        # Hammer-shaped bearish candle engulfing the last rising bar
        bars = bars_from_rows(rising + [(110.5, 110.8, 104, 109.2)])
        ctx = CandleContext.at(bars, 11)

        assert RULES_BY_KIND[PatternKind.HANGING_MAN].detect(ctx)
        assert RULES_BY_KIND[PatternKind.ENGULFING_BEARISH].detect(ctx)
        match = get_pattern_at_index(bars, 11)
        assert match.kind == PatternKind.ENGULFING_BEARISH
        assert match.start_index == 10


class TestRecognizer:
    def test_too_few_bars(self, bars_from_rows):
        bars = bars_from_rows(_downtrend_rows()[:9])
        assert detect_patterns(bars) == []

    def test_sorted_most_recent_first(self, sample_bars):
        patterns = detect_patterns(sample_bars)
        ends = [p.end_index for p in patterns]
        assert ends == sorted(ends, reverse=True)
        assert len(set(ends)) == len(ends)

    def test_scans_only_recent_bars(self, sample_bars):
        for match in detect_patterns(sample_bars):
            assert match.end_index >= len(sample_bars) - 20

    def test_latest_patterns(self, sample_bars):
        assert get_latest_patterns(sample_bars, 2) == detect_patterns(sample_bars)[:2]

    def test_pattern_at_index_missing(self, sample_bars):
        assert get_pattern_at_index(sample_bars, 0) is None

    def test_to_dict(self, bars_from_rows):
        bars = bars_from_rows(_downtrend_rows() + [(92, 93, 80, 93)])
        raw = get_pattern_at_index(bars, 15).to_dict()
        assert raw["pattern"] == "hammer"
        assert raw["direction"] == "bullish"
        assert raw["reliability"] == "high"


@st.composite
def ohlc_bars(draw):
    n = draw(st.integers(min_value=0, max_value=40))
    bars = []
    prev = 100.0
    for i in range(n):
        close = draw(st.floats(min_value=50.0, max_value=150.0, allow_nan=False))
        up = draw(st.floats(min_value=0.0, max_value=5.0, allow_nan=False))
        down = draw(st.floats(min_value=0.0, max_value=5.0, allow_nan=False))
        bars.append(
            Bar(
                time=datetime(2024, 1, 1) + timedelta(days=i),
                open=prev,
                high=max(prev, close) + up,
                low=min(prev, close) - down,
                close=close,
            )
        )
        prev = close
    return bars


@settings(max_examples=100, deadline=None)
@given(bars=ohlc_bars())
def test_at_most_one_pattern_per_bar(bars):
    patterns = detect_patterns(bars)
    ends = [p.end_index for p in patterns]

    assert len(set(ends)) == len(ends)
    assert ends == sorted(ends, reverse=True)
    for match in patterns:
        assert 0 <= match.start_index <= match.end_index < len(bars)
        assert match.end_index - match.start_index + 1 == RULES_BY_KIND[match.kind].span


@settings(max_examples=50, deadline=None)
@given(bars=ohlc_bars())
def test_detection_idempotent(bars):
    assert detect_patterns(bars) == detect_patterns(bars)
