"""
Indicator lookup table.

Indicator classes live one per module under the category packages and are
picked up by `discover()`. The engine resolves a parameter set to its
indicator through `get_for_params`, the CLI lists the table.
"""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path
from typing import Dict, List, Optional, Set

from ta_engine.utils.logging_setup import get_logger

from ..models import IndicatorCategory
from .base import Indicator, IndicatorBase, IndicatorParams

logger = get_logger(__name__)

CATEGORY_PACKAGES = ["trend", "momentum", "volatility", "volume", "pattern"]


def _defines_indicator(module: object, attr: object) -> bool:
    # Re-exported classes are registered by the module that defines them
    return (
        isinstance(attr, type)
        and issubclass(attr, IndicatorBase)
        and attr is not IndicatorBase
        and attr.__module__ == getattr(module, "__name__", None)
    )


class IndicatorRegistry:
    """
    Indicators keyed by name (equal to their params kind), indexed by category.

    Written only by discover(), register() and clear(); lookups never mutate it.
    """

    def __init__(self) -> None:
        self._indicators: Dict[str, Indicator] = {}
        self._by_category: Dict[IndicatorCategory, Set[str]] = {
            cat: set() for cat in IndicatorCategory
        }

    def clear(self) -> None:
        self._indicators.clear()
        for names in self._by_category.values():
            names.clear()

    def discover(self) -> int:
        """Register every indicator class in the category packages; returns the count."""
        discovered = sum(self._discover_package(category) for category in CATEGORY_PACKAGES)
        logger.debug(f"Discovered {discovered} indicators in {', '.join(CATEGORY_PACKAGES)}")
        return discovered

    def _discover_package(self, category: str) -> int:
        package = importlib.import_module(f"{__package__}.{category}")
        found = 0
        for module_info in pkgutil.iter_modules([str(Path(package.__file__).parent)]):
            if module_info.name.startswith("_"):
                continue
            module = importlib.import_module(f"{package.__name__}.{module_info.name}")
            for attr in vars(module).values():
                if _defines_indicator(module, attr):
                    self.register(attr())
                    found += 1
        return found

    def register(self, indicator: Indicator) -> None:
        """Add an indicator; a second one with the same name replaces the first."""
        name = indicator.name
        previous = self._indicators.get(name)
        if previous is not None:
            self._by_category[previous.category].discard(name)
            logger.warning(f"Indicator {name} already registered, overwriting")

        self._indicators[name] = indicator
        self._by_category[indicator.category].add(name)

    def get(self, name: str) -> Optional[Indicator]:
        return self._indicators.get(name)

    def get_for_params(self, params: IndicatorParams) -> Indicator:
        """
        Indicator that consumes a parameter set.

        Raises:
            KeyError: If no indicator is registered for params.kind
        """
        indicator = self._indicators.get(params.kind)
        if indicator is None:
            raise KeyError(f"No indicator registered for kind '{params.kind}'")
        return indicator

    def get_all(self) -> List[Indicator]:
        return list(self._indicators.values())

    def get_by_category(self, category: IndicatorCategory) -> List[Indicator]:
        """Indicators of one category sorted by name."""
        return [self._indicators[n] for n in sorted(self._by_category[category])]

    def get_names(self) -> List[str]:
        return list(self._indicators)

    def __len__(self) -> int:
        return len(self._indicators)

    def __contains__(self, name: object) -> bool:
        return name in self._indicators


_global_registry: Optional[IndicatorRegistry] = None


def get_indicator_registry() -> IndicatorRegistry:
    """Shared registry, discovered on first use."""
    global _global_registry
    if _global_registry is None:
        registry = IndicatorRegistry()
        registry.discover()
        _global_registry = registry
    return _global_registry
