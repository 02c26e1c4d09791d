"""
DataFrame interop for bar sequences.

Converts OHLCV DataFrames (the shape produced by data providers and CSV
exports) into immutable Bar tuples and back.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple

import pandas as pd

from ..models import Bar

PRICE_COLUMNS = ("open", "high", "low", "close")


def _optional_volume(value: Any) -> Optional[float]:
    if value is None:
        return None
    volume = float(value)
    return None if math.isnan(volume) else volume


def bars_from_frame(data: pd.DataFrame, time_column: Optional[str] = None) -> Tuple[Bar, ...]:
    """
    Build bars from an OHLCV DataFrame.

    Column names are matched case-insensitively. Only `close` is mandatory;
    missing open/high/low columns fall back to the close so close-only
    series can still feed close-based indicators.

    Args:
        data: DataFrame with open/high/low/close[/volume] columns
        time_column: Column holding bar times (default: "time", "timestamp" or
            "date" when present, otherwise the index)

    Returns:
        Tuple of bars in frame order

    Raises:
        ValueError: If there is no close column
    """
    frame = data.rename(columns={c: str(c).lower() for c in data.columns})
    if "close" not in frame.columns:
        raise ValueError(f"OHLCV frame requires a 'close' column, got: {list(data.columns)}")

    if time_column is None:
        time_column = next((c for c in ("time", "timestamp", "date") if c in frame.columns), None)
    times = frame[time_column].tolist() if time_column else list(frame.index)

    close = frame["close"].astype(float).tolist()
    columns = {
        name: frame[name].astype(float).tolist() if name in frame.columns else close
        for name in PRICE_COLUMNS
    }
    volume = frame["volume"].tolist() if "volume" in frame.columns else [None] * len(frame)

    return tuple(
        Bar(
            time=times[i],
            open=columns["open"][i],
            high=columns["high"][i],
            low=columns["low"][i],
            close=columns["close"][i],
            volume=_optional_volume(volume[i]),
        )
        for i in range(len(frame))
    )


def bars_from_records(records: Iterable[Mapping[str, Any]]) -> Tuple[Bar, ...]:
    """Build bars from dicts with time/open/high/low/close[/volume] keys."""
    return tuple(
        Bar(
            time=r.get("time", r.get("timestamp", r.get("date"))),
            open=float(r["open"]),
            high=float(r["high"]),
            low=float(r["low"]),
            close=float(r["close"]),
            volume=_optional_volume(r.get("volume")),
        )
        for r in records
    )


def bars_to_frame(bars: Sequence[Bar]) -> pd.DataFrame:
    """Bars as a DataFrame indexed by time (NaN for missing volume)."""
    rows: Dict[str, list] = {name: [] for name in (*PRICE_COLUMNS, "volume")}
    for bar in bars:
        rows["open"].append(bar.open)
        rows["high"].append(bar.high)
        rows["low"].append(bar.low)
        rows["close"].append(bar.close)
        rows["volume"].append(float("nan") if bar.volume is None else bar.volume)
    return pd.DataFrame(rows, index=[bar.time for bar in bars])
