"""
Indicator Protocol, Parameter Base and Indicator Base Class.

Defines the unified interface for all technical indicators in the analysis
engine. Each indicator has a typed, frozen parameter class (tagged by `kind`)
and an IndicatorBase subclass that the IndicatorRegistry auto-discovers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, List, Optional, Protocol, Sequence, Type, runtime_checkable

import pandas as pd

from ..models import Bar, IndicatorCategory


class IndicatorParamError(ValueError):
    """Invalid indicator parameter."""

    def __init__(self, kind: str, field_name: str, value: Any, reason: str):
        self.kind = kind
        self.field_name = field_name
        self.value = value
        super().__init__(f"{kind}.{field_name} {reason} (got: {value!r})")


def require_period(kind: str, field_name: str, value: Any) -> None:
    """Periods are integers >= 1."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise IndicatorParamError(kind, field_name, value, "must be an integer")
    if value < 1:
        raise IndicatorParamError(kind, field_name, value, "must be >= 1")


def require_positive(kind: str, field_name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise IndicatorParamError(kind, field_name, value, "must be a number")
    if value <= 0:
        raise IndicatorParamError(kind, field_name, value, "must be > 0")


@dataclass(frozen=True)
class IndicatorParams:
    """
    Base for per-indicator parameter sets.

    Subclasses set `kind` and declare their fields with defaults; validation
    runs on construction so an invalid parameter set cannot exist.
    """

    kind: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """Raise IndicatorParamError for invalid values."""


@runtime_checkable
class Indicator(Protocol):
    """
    Protocol for all technical indicators.

    Each indicator must define:
    - name: Unique identifier (e.g., "rsi", "macd"), equal to its params kind
    - category: IndicatorCategory (TREND, MOMENTUM, etc.)
    - required_fields: Bar fields read by the calculation
    - params_type: Frozen parameter dataclass

    And implement:
    - calculate(): Compute the indicator result from bars
    - warmup_periods(): Index of the first non-null output
    """

    name: str
    category: IndicatorCategory
    required_fields: List[str]
    params_type: Type[IndicatorParams]

    @property
    def default_params(self) -> IndicatorParams:
        ...

    def calculate(self, bars: Sequence[Bar], params: Optional[IndicatorParams] = None) -> Any:
        ...

    def warmup_periods(self, params: Optional[IndicatorParams] = None) -> int:
        ...


class IndicatorBase(ABC):
    """
    Abstract base class for indicators with common functionality.

    Provides:
    - Default parameter construction
    - Parameter type checking
    - DataFrame entry point with column validation

    Subclasses must implement:
    - _calculate(): Core calculation, delegating to the module's pure function
    - _warmup(): First index with a value for given params
    """

    name: str = ""
    category: IndicatorCategory = IndicatorCategory.MOMENTUM
    required_fields: List[str] = ["close"]
    params_type: Type[IndicatorParams] = IndicatorParams

    @property
    def default_params(self) -> IndicatorParams:
        """Default parameters for this indicator."""
        return self.params_type()

    def calculate(self, bars: Sequence[Bar], params: Optional[IndicatorParams] = None) -> Any:
        """
        Calculate the indicator.

        Args:
            bars: Bars in ascending time order (never modified)
            params: Parameter set of this indicator's params_type (defaults if None)

        Returns:
            Line series or result dataclass aligned with bars

        Raises:
            TypeError: If params belong to a different indicator
        """
        resolved = self._resolve(params)
        return self._calculate(bars, resolved)

    def calculate_frame(
        self,
        data: pd.DataFrame,
        params: Optional[IndicatorParams] = None,
    ) -> Any:
        """
        Calculate from an OHLCV DataFrame.

        Raises:
            ValueError: If required columns are missing
        """
        from ..data.frames import bars_from_frame

        self._validate_data(data)
        return self.calculate(bars_from_frame(data), params)

    def warmup_periods(self, params: Optional[IndicatorParams] = None) -> int:
        """Number of leading bars that are always None."""
        return self._warmup(self._resolve(params))

    def _resolve(self, params: Optional[IndicatorParams]) -> IndicatorParams:
        if params is None:
            return self.default_params
        if not isinstance(params, self.params_type):
            raise TypeError(
                f"Indicator {self.name} expects {self.params_type.__name__}, "
                f"got {type(params).__name__}"
            )
        return params

    @abstractmethod
    def _calculate(self, bars: Sequence[Bar], params: Any) -> Any:
        ...

    @abstractmethod
    def _warmup(self, params: Any) -> int:
        ...

    def _validate_data(self, data: pd.DataFrame) -> None:
        """
        Validate that required fields are present.

        Raises:
            ValueError: If required fields are missing
        """
        missing = [f for f in self.required_fields if f not in data.columns]
        if missing:
            raise ValueError(
                f"Indicator {self.name} requires fields {self.required_fields}, "
                f"missing: {missing}"
            )
