"""
Configuration Schema and Validation for Signal Detection.

Provides:
- SignalDetectionConfig: Thresholds and periods used by detect_signals
- Validation of raw (YAML) signal sections with error context
- Loading a standalone signals YAML file
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Set, Tuple

from ta_engine.utils.logging_setup import get_logger

logger = get_logger(__name__)


class ConfigError(Exception):
    """Configuration validation error with context."""

    def __init__(self, message: str, path: str = "", value: Any = None):
        self.message = message
        self.path = path
        self.value = value
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f"at '{self.path}'")
        if self.value is not None:
            parts.append(f"(got: {self.value!r})")
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of configuration validation."""

    valid: bool
    errors: List[ConfigError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str, path: str = "", value: Any = None) -> None:
        """Add a validation error."""
        self.errors.append(ConfigError(message, path, value))
        self.valid = False

    def add_warning(self, message: str) -> None:
        """Add a validation warning."""
        self.warnings.append(message)

    def merge(self, other: "ValidationResult") -> None:
        """Merge another validation result into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        if not other.valid:
            self.valid = False


# --- Signal Detection Schema ---


@dataclass(frozen=True)
class SignalDetectionConfig:
    """
    Periods and thresholds for signal detection.

    Thresholds are compared on the 0-100 scale of the oscillators; bandwidths
    are fractions of the middle Bollinger band.
    """

    # RSI
    rsi_period: int = 14
    rsi_oversold: float = 30
    rsi_overbought: float = 70
    rsi_strong_oversold: float = 20
    rsi_strong_overbought: float = 80

    # MACD
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9

    # Bollinger
    bollinger_period: int = 20
    bollinger_std_dev: float = 2.0
    bollinger_squeeze_period: int = 20
    squeeze_bandwidth: float = 0.10
    strong_squeeze_bandwidth: float = 0.05

    # Stochastic
    stochastic_k: int = 14
    stochastic_k_slow: int = 3
    stochastic_d: int = 3
    stochastic_oversold: float = 20
    stochastic_overbought: float = 80
    stochastic_strong_oversold: float = 10
    stochastic_strong_overbought: float = 90

    # ADX
    adx_period: int = 14
    adx_trend_threshold: float = 25
    adx_strong_threshold: float = 40

    # Scan window
    min_bars: int = 30
    signal_window: int = 5
    divergence_lookback: int = 20

    # Moving-average crosses
    ma_cross_enabled: bool = False
    ma_fast_period: int = 50
    ma_slow_period: int = 200

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


PERIOD_FIELDS: Set[str] = {
    "rsi_period",
    "macd_fast",
    "macd_slow",
    "macd_signal",
    "bollinger_period",
    "bollinger_squeeze_period",
    "stochastic_k",
    "stochastic_k_slow",
    "stochastic_d",
    "adx_period",
    "min_bars",
    "signal_window",
    "divergence_lookback",
    "ma_fast_period",
    "ma_slow_period",
}

BOOL_FIELDS: Set[str] = {"ma_cross_enabled"}

# (lower, upper) pairs that must satisfy lower < upper
STRICT_ORDER: List[Tuple[str, str]] = [
    ("rsi_oversold", "rsi_overbought"),
    ("stochastic_oversold", "stochastic_overbought"),
    ("macd_fast", "macd_slow"),
    ("ma_fast_period", "ma_slow_period"),
]

# (lower, upper) pairs that must satisfy lower <= upper
LOOSE_ORDER: List[Tuple[str, str]] = [
    ("rsi_strong_oversold", "rsi_oversold"),
    ("rsi_overbought", "rsi_strong_overbought"),
    ("stochastic_strong_oversold", "stochastic_oversold"),
    ("stochastic_overbought", "stochastic_strong_overbought"),
    ("adx_trend_threshold", "adx_strong_threshold"),
    ("strong_squeeze_bandwidth", "squeeze_bandwidth"),
]

_FIELD_NAMES: Set[str] = {f.name for f in dataclasses.fields(SignalDetectionConfig)}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_signal_config(data: Dict[str, Any], path: str = "signals") -> ValidationResult:
    """
    Validate a signal detection section.

    Args:
        data: Raw YAML data (keys are SignalDetectionConfig field names)
        path: Location prefix used in error messages

    Returns:
        ValidationResult with any errors/warnings
    """
    result = ValidationResult(valid=True)

    if not isinstance(data, dict):
        result.add_error("Must be a dictionary", path, data)
        return result

    for key, value in data.items():
        key_path = f"{path}.{key}"

        if key not in _FIELD_NAMES:
            result.add_warning(f"Unknown signal setting '{key_path}' ignored")
            continue

        if key in BOOL_FIELDS:
            if not isinstance(value, bool):
                result.add_error("Must be a boolean", key_path, value)
        elif key in PERIOD_FIELDS:
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                result.add_error("Must be an integer >= 1", key_path, value)
        elif not _is_number(value):
            result.add_error("Must be a number", key_path, value)
        elif value < 0:
            result.add_error("Must be a non-negative number", key_path, value)

    if not result.valid:
        return result

    # Ordering is checked on the merged view so partial overrides are judged
    # against the defaults they leave in place.
    merged = {**dataclasses.asdict(SignalDetectionConfig()), **{
        k: v for k, v in data.items() if k in _FIELD_NAMES
    }}

    for lower, upper in STRICT_ORDER:
        if not merged[lower] < merged[upper]:
            result.add_error(
                f"'{lower}' must be less than '{upper}' ({merged[upper]!r})",
                f"{path}.{lower}",
                merged[lower],
            )

    for lower, upper in LOOSE_ORDER:
        if not merged[lower] <= merged[upper]:
            result.add_error(
                f"'{lower}' must not exceed '{upper}' ({merged[upper]!r})",
                f"{path}.{lower}",
                merged[lower],
            )

    if merged["bollinger_std_dev"] <= 0:
        result.add_error("Must be > 0", f"{path}.bollinger_std_dev", merged["bollinger_std_dev"])

    return result


def signal_config_from_dict(data: Dict[str, Any], path: str = "signals") -> SignalDetectionConfig:
    """
    Build a SignalDetectionConfig from raw data, falling back to defaults.

    Raises:
        ConfigError: First validation error
    """
    result = validate_signal_config(data, path)
    for warning in result.warnings:
        logger.warning(warning)
    if not result.valid:
        raise result.errors[0]

    return SignalDetectionConfig(**{k: v for k, v in data.items() if k in _FIELD_NAMES})


def load_and_validate_signals(path: str) -> tuple[Dict[str, Any], ValidationResult]:
    """
    Load and validate a signals configuration file.

    The file holds a top-level "signals" mapping or the settings directly.

    Args:
        path: Path to YAML file

    Returns:
        Tuple of (raw signal settings, validation result)
    """
    import yaml

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        result = ValidationResult(valid=False)
        result.add_error(f"Configuration file not found: {path}")
        return {}, result
    except yaml.YAMLError as e:
        result = ValidationResult(valid=False)
        result.add_error(f"Invalid YAML syntax: {e}")
        return {}, result

    if isinstance(data, dict) and "signals" in data:
        data = data["signals"] or {}

    return data, validate_signal_config(data)
