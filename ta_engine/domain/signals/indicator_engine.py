"""
IndicatorEngine - Computes configured indicators over bar sequences.

Resolves each parameter set to its registered indicator and calculates the
results for one security, or for a whole universe of securities in parallel
using a ThreadPoolExecutor. All indicator calculations are pure functions of
their bars, so securities can be processed concurrently without locking.
"""

from __future__ import annotations

import dataclasses
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from ta_engine.utils.logging_setup import get_logger

from .indicators.base import IndicatorParams
from .indicators.configs import DEFAULT_INDICATOR_CONFIGS
from .indicators.registry import IndicatorRegistry, get_indicator_registry
from .models import Bar

logger = get_logger(__name__)

IndicatorConfigs = Union[Mapping[str, IndicatorParams], Iterable[IndicatorParams]]


def config_key(params: IndicatorParams) -> str:
    """
    Result key for a parameter set: kind followed by its values.

    Example:
        config_key(MACDParams()) -> "macd_12_26_9"
        config_key(OBVParams()) -> "obv"
    """
    parts = [params.kind] + [str(getattr(params, f.name)) for f in dataclasses.fields(params)]
    return "_".join(parts)


class IndicatorEngine:
    """
    Computes indicator results for configured parameter sets.

    Example:
        engine = IndicatorEngine()
        results = engine.compute(bars, [RSIParams(period=9), SMAParams(period=50)])
        results["rsi_9"]  # List[Point]
    """

    def __init__(
        self,
        registry: Optional[IndicatorRegistry] = None,
        max_workers: int = 4,
    ) -> None:
        """
        Initialize the engine.

        Args:
            registry: Indicator registry (global registry if None)
            max_workers: ThreadPool size for compute_universe
        """
        self._registry = registry if registry is not None else get_indicator_registry()
        self._max_workers = max_workers

    @property
    def registry(self) -> IndicatorRegistry:
        return self._registry

    def _keyed(self, configs: Optional[IndicatorConfigs]) -> Dict[str, IndicatorParams]:
        if configs is None:
            configs = DEFAULT_INDICATOR_CONFIGS
        if isinstance(configs, Mapping):
            return dict(configs)
        return {config_key(params): params for params in configs}

    def compute(
        self,
        bars: Sequence[Bar],
        configs: Optional[IndicatorConfigs] = None,
    ) -> Dict[str, Any]:
        """
        Calculate every configured indicator for one bar sequence.

        Args:
            bars: Bars in ascending time order
            configs: Mapping of result key to params, or an iterable of params
                (keys derived with config_key). Defaults to
                DEFAULT_INDICATOR_CONFIGS.

        Returns:
            Dict of result key to indicator result

        Raises:
            KeyError: If a parameter kind has no registered indicator
        """
        keyed = self._keyed(configs)
        results: Dict[str, Any] = {}
        for key, params in keyed.items():
            indicator = self._registry.get_for_params(params)
            results[key] = indicator.calculate(bars, params)

        logger.debug(f"Computed {len(results)} indicators over {len(bars)} bars")
        return results

    def compute_universe(
        self,
        universe: Mapping[str, Sequence[Bar]],
        configs: Optional[IndicatorConfigs] = None,
        max_workers: Optional[int] = None,
    ) -> Dict[str, Dict[str, Any]]:
        """
        Calculate the configured indicators for many securities in parallel.

        Args:
            universe: Mapping of security identifier to its bars
            configs: Same as compute()
            max_workers: Overrides the engine's pool size

        Returns:
            Dict of security identifier to compute() result
        """
        keyed = self._keyed(configs)
        workers = max_workers or self._max_workers

        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                symbol: executor.submit(self.compute, bars, keyed)
                for symbol, bars in universe.items()
            }
            results = {symbol: future.result() for symbol, future in futures.items()}

        logger.debug(
            f"Computed {len(keyed)} indicators for {len(results)} securities "
            f"({workers} workers)"
        )
        return results
