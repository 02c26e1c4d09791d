"""
Nullable series helpers.

Indicators compute on float64 arrays with NaN marking missing history, the
same way the calculation loops elsewhere in this package do. Crossing into the
public Point type always turns NaN into None, and combining two series goes
through map2/zip_with so every composition states its null handling.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, List, Optional, Sequence

import numpy as np

from .models import Bar, LineSeries, Point

OptionalFloat = Optional[float]


def is_missing(value: OptionalFloat) -> bool:
    """True for None and NaN."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def as_optional(value: object) -> OptionalFloat:
    """Normalize a numeric value to Optional[float] (NaN -> None)."""
    if value is None:
        return None
    result = float(value)  # type: ignore[arg-type]
    return None if math.isnan(result) else result


def map2(
    a: OptionalFloat,
    b: OptionalFloat,
    fn: Callable[[float, float], float],
) -> OptionalFloat:
    """Apply fn when both operands are present, otherwise None."""
    if a is None or b is None:
        return None
    return fn(a, b)


def map1(a: OptionalFloat, fn: Callable[[float], float]) -> OptionalFloat:
    if a is None:
        return None
    return fn(a)


def to_points(bars: Sequence[Bar], values: Iterable[object]) -> LineSeries:
    """Pair values with bar times; NaN and None both become None."""
    return [Point(time=bar.time, value=as_optional(v)) for bar, v in zip(bars, values)]


def null_series(bars: Sequence[Bar]) -> LineSeries:
    return [Point(time=bar.time, value=None) for bar in bars]


def values_of(series: Sequence[Point]) -> List[OptionalFloat]:
    return [p.value for p in series]


def to_array(series: Sequence[Point]) -> np.ndarray:
    """Series values as float64 array with NaN for None."""
    return np.array(
        [np.nan if p.value is None else p.value for p in series], dtype=np.float64
    )


def zip_with(
    a: Sequence[Point],
    b: Sequence[Point],
    fn: Callable[[float, float], float],
) -> LineSeries:
    """
    Pointwise combination of two aligned series.

    Args:
        a: Series providing the output times
        b: Series of the same length
        fn: Combiner applied where both values are present

    Returns:
        New series, None wherever either input is None

    Raises:
        ValueError: If the series are not the same length
    """
    if len(a) != len(b):
        raise ValueError(f"Cannot combine series of length {len(a)} and {len(b)}")
    return [Point(time=pa.time, value=map2(pa.value, pb.value, fn)) for pa, pb in zip(a, b)]


def map_series(series: Sequence[Point], fn: Callable[[float], float]) -> LineSeries:
    return [Point(time=p.time, value=map1(p.value, fn)) for p in series]


# =============================================================================
# Bar field extraction
# =============================================================================


def closes(bars: Sequence[Bar]) -> np.ndarray:
    return np.array([b.close for b in bars], dtype=np.float64)


def opens(bars: Sequence[Bar]) -> np.ndarray:
    return np.array([b.open for b in bars], dtype=np.float64)


def highs(bars: Sequence[Bar]) -> np.ndarray:
    return np.array([b.high for b in bars], dtype=np.float64)


def lows(bars: Sequence[Bar]) -> np.ndarray:
    return np.array([b.low for b in bars], dtype=np.float64)


def volumes(bars: Sequence[Bar]) -> np.ndarray:
    """Volumes with missing values counted as zero."""
    return np.array([b.volume or 0.0 for b in bars], dtype=np.float64)
