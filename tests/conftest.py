"""Pytest configuration and shared bar fixtures."""

from datetime import datetime, timedelta
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import pytest

from ta_engine.domain.signals.models import Bar

START_TIME = datetime(2024, 1, 2)


def make_bars(
    closes: Sequence[float],
    spread: float = 1.0,
    volume: Optional[float] = 1000.0,
) -> Tuple[Bar, ...]:
    """Bars around the given closes: open = previous close, high/low = close +/- spread."""
    bars: List[Bar] = []
    prev = closes[0] if closes else 0.0
    for i, close in enumerate(closes):
        bars.append(
            Bar(
                time=START_TIME + timedelta(days=i),
                open=prev,
                high=max(prev, close) + spread,
                low=min(prev, close) - spread,
                close=close,
                volume=volume,
            )
        )
        prev = close
    return tuple(bars)


def make_ohlc(rows: Sequence[Tuple[float, float, float, float]]) -> Tuple[Bar, ...]:
    """Bars from explicit (open, high, low, close) rows."""
    return tuple(
        Bar(time=START_TIME + timedelta(days=i), open=o, high=h, low=l, close=c, volume=1000.0)
        for i, (o, h, l, c) in enumerate(rows)
    )


def generate_ohlcv_data(
    n_bars: int = 200,
    start_price: float = 100.0,
    volatility: float = 0.02,
    seed: int = 42,
) -> pd.DataFrame:
    """
    Generate realistic OHLCV data for testing.

    Returns:
        DataFrame with columns: time, open, high, low, close, volume
    """
    rng = np.random.RandomState(seed)

    returns = rng.normal(0, volatility, n_bars)
    prices = start_price * np.exp(np.cumsum(returns))

    opens = np.roll(prices, 1)
    opens[0] = start_price
    highs = np.maximum(opens, prices) * (1 + rng.uniform(0, volatility / 2, n_bars))
    lows = np.minimum(opens, prices) * (1 - rng.uniform(0, volatility / 2, n_bars))
    volumes = rng.lognormal(np.log(1_000_000), 0.5, n_bars).astype(int)

    return pd.DataFrame(
        {
            "time": [START_TIME + timedelta(days=i) for i in range(n_bars)],
            "open": opens,
            "high": highs,
            "low": lows,
            "close": prices,
            "volume": volumes,
        }
    )


@pytest.fixture
def ohlcv_frame() -> pd.DataFrame:
    return generate_ohlcv_data()


@pytest.fixture
def sample_bars(ohlcv_frame: pd.DataFrame) -> Tuple[Bar, ...]:
    """200 deterministic random-walk bars."""
    from ta_engine.domain.signals.data import bars_from_frame

    return bars_from_frame(ohlcv_frame)


@pytest.fixture
def rising_bars() -> Tuple[Bar, ...]:
    return make_bars([100.0 + i for i in range(60)])


@pytest.fixture
def falling_bars() -> Tuple[Bar, ...]:
    return make_bars([200.0 - i for i in range(60)])


@pytest.fixture
def bars_from_closes():
    """Factory fixture: make_bars(closes, spread=1.0, volume=1000.0)."""
    return make_bars


@pytest.fixture
def bars_from_rows():
    """Factory fixture: make_ohlc([(open, high, low, close), ...])."""
    return make_ohlc


@pytest.fixture
def ohlcv_factory():
    """Factory fixture: generate_ohlcv_data(n_bars, start_price, volatility, seed)."""
    return generate_ohlcv_data
