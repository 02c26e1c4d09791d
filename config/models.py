"""Configuration data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ta_engine.domain.signals.config.schema import SignalDetectionConfig
from ta_engine.domain.signals.indicators.configs import IndicatorType


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    json: bool = False
    color: bool = True
    file: str = ""  # Empty = no file logging
    rotation: str = "size"  # "size" or "time"
    max_bytes: int = 10 * 1024 * 1024  # For size-based rotation
    backup_count: int = 5  # Number of backup files to keep
    when: str = "midnight"  # For time-based rotation: "midnight", "H" (hourly), "D" (daily)
    interval: int = 1  # Interval for time-based rotation
    timezone: str = "local"  # Timezone for log timestamps (e.g., "Europe/Berlin", "UTC", or "local")


@dataclass
class AppConfig:
    """Complete application configuration."""
    logging: LoggingConfig
    signals: SignalDetectionConfig
    indicators: List[IndicatorType] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)  # Merged YAML as loaded
