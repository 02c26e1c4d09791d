"""
Indicator configurations.

IndicatorType is the tagged union of all parameter classes; the `kind` class
attribute of each member names the indicator that consumes it. Parameter
sets can be built from plain mappings (YAML, JSON) with params_from_dict.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Mapping, Type, Union

from .base import IndicatorParamError, IndicatorParams
from .momentum.macd import MACDParams
from .momentum.rsi import RSIParams
from .momentum.stochastic import StochasticParams
from .pattern.fibonacci import FibonacciParams
from .pattern.pivot import PivotParams
from .trend.adx import ADXParams
from .trend.ema import EMAParams
from .trend.ichimoku import IchimokuParams
from .trend.sma import SMAParams
from .volatility.atr import ATRParams
from .volatility.bollinger import BollingerParams
from .volume.obv import OBVParams
from .volume.vwap import VWAPParams

IndicatorType = Union[
    SMAParams,
    EMAParams,
    RSIParams,
    MACDParams,
    BollingerParams,
    ATRParams,
    VWAPParams,
    StochasticParams,
    OBVParams,
    ADXParams,
    IchimokuParams,
    PivotParams,
    FibonacciParams,
]

PARAMS_BY_KIND: Dict[str, Type[IndicatorParams]] = {
    cls.kind: cls
    for cls in (
        SMAParams,
        EMAParams,
        RSIParams,
        MACDParams,
        BollingerParams,
        ATRParams,
        VWAPParams,
        StochasticParams,
        OBVParams,
        ADXParams,
        IchimokuParams,
        PivotParams,
        FibonacciParams,
    )
}

DEFAULT_INDICATOR_CONFIGS: List[IndicatorType] = [cls() for cls in PARAMS_BY_KIND.values()]


def params_from_dict(raw: Mapping[str, Any]) -> IndicatorType:
    """
    Build a parameter set from a mapping with a "type" (or "kind") key.

    Example:
        params_from_dict({"type": "rsi", "period": 9}) -> RSIParams(period=9)

    Raises:
        IndicatorParamError: If the type is unknown, a field is unknown, or a
            value fails validation
    """
    values = dict(raw)
    kind = values.pop("type", None) or values.pop("kind", None)
    if kind not in PARAMS_BY_KIND:
        raise IndicatorParamError(
            "indicator", "type", kind, f"must be one of {sorted(PARAMS_BY_KIND)}"
        )

    params_cls = PARAMS_BY_KIND[kind]
    known = {f.name for f in dataclasses.fields(params_cls)}
    for key in values:
        if key not in known:
            raise IndicatorParamError(kind, key, values[key], "is not a parameter")

    return params_cls(**values)  # type: ignore[return-value]


def params_to_dict(params: IndicatorParams) -> Dict[str, Any]:
    return {"type": params.kind, **dataclasses.asdict(params)}
