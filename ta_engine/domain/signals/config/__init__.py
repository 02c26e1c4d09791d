"""
Signal Detection Configuration Module.

Provides the signal detection settings and their schema validation.
"""

from .schema import (
    ConfigError,
    SignalDetectionConfig,
    ValidationResult,
    load_and_validate_signals,
    signal_config_from_dict,
    validate_signal_config,
)

__all__ = [
    "ConfigError",
    "SignalDetectionConfig",
    "ValidationResult",
    "load_and_validate_signals",
    "signal_config_from_dict",
    "validate_signal_config",
]
