"""Tests for typed indicator parameter sets."""

import dataclasses

import pytest

from ta_engine.domain.signals.indicators import (
    DEFAULT_INDICATOR_CONFIGS,
    PARAMS_BY_KIND,
    BollingerParams,
    IndicatorParamError,
    MACDParams,
    OBVParams,
    RSIParams,
    params_from_dict,
    params_to_dict,
)


def test_defaults_cover_every_kind():
    assert {p.kind for p in DEFAULT_INDICATOR_CONFIGS} == set(PARAMS_BY_KIND)
    assert len(PARAMS_BY_KIND) == 13


def test_params_are_frozen():
    params = RSIParams()
    with pytest.raises(dataclasses.FrozenInstanceError):
        params.period = 5  # type: ignore[misc]


def test_from_dict_with_type_key():
    assert params_from_dict({"type": "rsi", "period": 9}) == RSIParams(period=9)


def test_from_dict_with_kind_key_and_defaults():
    assert params_from_dict({"kind": "macd", "fast": 8}) == MACDParams(fast=8, slow=26, signal=9)


def test_from_dict_parameterless():
    assert params_from_dict({"type": "obv"}) == OBVParams()


def test_from_dict_unknown_kind():
    with pytest.raises(IndicatorParamError, match="must be one of"):
        params_from_dict({"type": "supertrend"})


def test_from_dict_unknown_field():
    with pytest.raises(IndicatorParamError, match="is not a parameter"):
        params_from_dict({"type": "rsi", "length": 14})


def test_from_dict_invalid_value():
    with pytest.raises(IndicatorParamError) as exc_info:
        params_from_dict({"type": "bollinger", "std_dev": -1})
    assert exc_info.value.kind == "bollinger"
    assert exc_info.value.field_name == "std_dev"


def test_to_dict_round_trip():
    params = BollingerParams(period=10, std_dev=1.5)
    raw = params_to_dict(params)
    assert raw == {"type": "bollinger", "period": 10, "std_dev": 1.5}
    assert params_from_dict(raw) == params


def test_param_error_is_value_error():
    with pytest.raises(ValueError):
        RSIParams(period="14")  # type: ignore[arg-type]
