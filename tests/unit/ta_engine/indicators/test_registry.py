"""Tests for indicator auto-discovery and lookup."""

from typing import Any, Sequence

import pytest

from ta_engine.domain.signals.indicators import (
    DEFAULT_INDICATOR_CONFIGS,
    IndicatorBase,
    IndicatorRegistry,
    RSIParams,
    SMAParams,
    get_indicator_registry,
)
from ta_engine.domain.signals.indicators.trend.sma import SMAIndicator
from ta_engine.domain.signals.models import Bar, IndicatorCategory

ALL_NAMES = {
    "sma", "ema", "adx", "ichimoku",
    "rsi", "macd", "stochastic",
    "atr", "bollinger",
    "obv", "vwap",
    "pivot", "fibonacci",
}


@pytest.fixture
def registry() -> IndicatorRegistry:
    reg = IndicatorRegistry()
    reg.discover()
    return reg


class TestDiscovery:
    def test_discovers_all_indicators(self, registry: IndicatorRegistry) -> None:
        assert set(registry.get_names()) == ALL_NAMES
        assert len(registry) == len(ALL_NAMES)

    def test_every_default_config_has_an_indicator(self, registry: IndicatorRegistry) -> None:
        for params in DEFAULT_INDICATOR_CONFIGS:
            assert registry.get_for_params(params).name == params.kind

    def test_by_category_sorted(self, registry: IndicatorRegistry) -> None:
        momentum = [ind.name for ind in registry.get_by_category(IndicatorCategory.MOMENTUM)]
        assert momentum == ["macd", "rsi", "stochastic"]

    def test_contains(self, registry: IndicatorRegistry) -> None:
        assert "rsi" in registry
        assert "nope" not in registry
        assert registry.get("nope") is None

    def test_global_registry_is_singleton(self) -> None:
        assert get_indicator_registry() is get_indicator_registry()

    def test_clear(self, registry: IndicatorRegistry) -> None:
        registry.clear()
        assert len(registry) == 0
        assert registry.get_by_category(IndicatorCategory.TREND) == []


class TestRegistration:
    def test_register_overwrites_and_reindexes(self) -> None:
        class AltSMA(IndicatorBase):
            name = "sma"
            category = IndicatorCategory.MOMENTUM
            params_type = SMAParams

            def _calculate(self, bars: Sequence[Bar], params: Any) -> Any:
                return []

            def _warmup(self, params: Any) -> int:
                return 0

        reg = IndicatorRegistry()
        reg.register(SMAIndicator())
        reg.register(AltSMA())

        assert isinstance(reg.get("sma"), AltSMA)
        assert reg.get_by_category(IndicatorCategory.TREND) == []
        assert [i.name for i in reg.get_by_category(IndicatorCategory.MOMENTUM)] == ["sma"]

    def test_get_for_unregistered_params(self) -> None:
        with pytest.raises(KeyError):
            IndicatorRegistry().get_for_params(RSIParams())


class TestIndicatorBase:
    def test_wrong_params_type_rejected(self, registry: IndicatorRegistry, sample_bars) -> None:
        with pytest.raises(TypeError):
            registry.get("sma").calculate(sample_bars, RSIParams())

    def test_default_params_used(self, registry: IndicatorRegistry, sample_bars) -> None:
        series = registry.get("sma").calculate(sample_bars)
        assert series[18].value is None
        assert series[19].value is not None

    def test_warmup_matches_first_value(self, registry: IndicatorRegistry, sample_bars) -> None:
        for name in ("sma", "ema", "rsi", "atr"):
            indicator = registry.get(name)
            series = indicator.calculate(sample_bars)
            warmup = indicator.warmup_periods()
            assert series[warmup - 1].value is None
            assert series[warmup].value is not None

    def test_calculate_frame_validates_columns(self, registry: IndicatorRegistry, ohlcv_frame) -> None:
        with pytest.raises(ValueError, match="missing"):
            registry.get("atr").calculate_frame(ohlcv_frame.drop(columns=["high"]))

    def test_calculate_frame(self, registry: IndicatorRegistry, ohlcv_frame) -> None:
        series = registry.get("rsi").calculate_frame(ohlcv_frame, RSIParams(period=9))
        assert len(series) == len(ohlcv_frame)
        assert series[9].value is not None
