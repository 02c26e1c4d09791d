"""
Configuration manager with environment-based loading.

Supports:
- Base configuration (base.yaml)
- Environment-specific overrides (dev.yaml, prod.yaml)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from ta_engine.domain.signals.config.schema import signal_config_from_dict
from ta_engine.domain.signals.indicators.configs import (
    DEFAULT_INDICATOR_CONFIGS,
    IndicatorType,
    params_from_dict,
)
from ta_engine.utils.logging_setup import get_logger

from .models import AppConfig, LoggingConfig

logger = get_logger(__name__)

VALID_ROTATIONS = ("size", "time")


class ConfigManager:
    """
    Configuration manager with environment support.

    Loads configuration in this order:
    1. base.yaml (default config)
    2. {env}.yaml (environment-specific, e.g., dev.yaml)

    Later configs override earlier ones (deep merge).
    """

    def __init__(self, config_dir: str | Path = "config", env: str = "dev"):
        """
        Initialize config manager.

        Args:
            config_dir: Directory containing config files.
            env: Environment name (dev, prod, etc).
        """
        self.config_dir = Path(config_dir)
        self.env = env
        self.config: Dict[str, Any] = {}

    def load(self) -> AppConfig:
        """
        Load configuration from YAML files.

        Returns:
            AppConfig object.

        Raises:
            FileNotFoundError: If base config not found.
            ConfigError: If the signals section is invalid.
            ValueError: If another section is invalid.
        """
        base_path = self.config_dir / "base.yaml"
        if not base_path.exists():
            raise FileNotFoundError(f"Base config not found: {base_path}")

        self.config = self._load_yaml(base_path)
        logger.debug(f"Loaded base config from {base_path}")

        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            env_config = self._load_yaml(env_path)
            self.config = self._merge_dicts(self.config, env_config)
            logger.debug(f"Loaded {self.env} config from {env_path}")

        return self._parse_config()

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level")
        return data

    def _merge_dicts(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts (override wins)."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def _parse_logging(self) -> LoggingConfig:
        logging_raw = self.config.get("logging") or {}
        defaults = LoggingConfig()
        logging_config = LoggingConfig(
            level=str(logging_raw.get("level", defaults.level)),
            json=bool(logging_raw.get("json", defaults.json)),
            color=bool(logging_raw.get("color", defaults.color)),
            file=logging_raw.get("file") or "",
            rotation=logging_raw.get("rotation", defaults.rotation),
            max_bytes=int(logging_raw.get("max_bytes", defaults.max_bytes)),
            backup_count=int(logging_raw.get("backup_count", defaults.backup_count)),
            when=logging_raw.get("when", defaults.when),
            interval=int(logging_raw.get("interval", defaults.interval)),
            timezone=logging_raw.get("timezone", defaults.timezone),
        )
        if logging_config.rotation not in VALID_ROTATIONS:
            raise ValueError(
                f"logging.rotation must be one of {list(VALID_ROTATIONS)}, "
                f"got {logging_config.rotation!r}"
            )
        return logging_config

    def _parse_indicators(self) -> List[IndicatorType]:
        indicators_raw = self.config.get("indicators")
        if indicators_raw is None:
            return list(DEFAULT_INDICATOR_CONFIGS)
        if not isinstance(indicators_raw, list):
            raise ValueError("indicators must be a list of parameter mappings")
        return [params_from_dict(entry) for entry in indicators_raw]

    def _parse_config(self) -> AppConfig:
        """Parse raw dict into AppConfig."""
        try:
            logging_config = self._parse_logging()
        except (TypeError, ValueError) as e:
            raise ValueError(f"Failed to parse logging config: {e}") from e

        signals = signal_config_from_dict(self.config.get("signals") or {})
        indicators = self._parse_indicators()

        return AppConfig(
            logging=logging_config,
            signals=signals,
            indicators=indicators,
            raw=self.config,
        )
