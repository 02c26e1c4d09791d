"""Tests for environment-based configuration loading."""

from pathlib import Path

import pytest
import yaml

from config import AppConfig, ConfigManager, LoggingConfig
from ta_engine.domain.signals import SignalDetectionConfig
from ta_engine.domain.signals.config import ConfigError
from ta_engine.domain.signals.indicators import (
    DEFAULT_INDICATOR_CONFIGS,
    IndicatorParamError,
    MACDParams,
    RSIParams,
)

REPO_CONFIG_DIR = Path(__file__).resolve().parents[3] / "config"


def _write(directory: Path, name: str, data) -> None:
    (directory / name).write_text(yaml.safe_dump(data))


class TestLoad:
    def test_missing_base(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigManager(config_dir=tmp_path).load()

    def test_empty_base_uses_defaults(self, tmp_path):
        (tmp_path / "base.yaml").write_text("")
        config = ConfigManager(config_dir=tmp_path).load()

        assert isinstance(config, AppConfig)
        assert config.logging == LoggingConfig()
        assert config.signals == SignalDetectionConfig()
        assert config.indicators == list(DEFAULT_INDICATOR_CONFIGS)

    def test_env_overlay_deep_merges(self, tmp_path):
        _write(tmp_path, "base.yaml", {
            "logging": {"level": "INFO", "json": True},
            "signals": {"rsi_period": 14, "rsi_oversold": 25},
        })
        _write(tmp_path, "prod.yaml", {"logging": {"level": "WARNING"}, "signals": {"rsi_period": 9}})

        config = ConfigManager(config_dir=tmp_path, env="prod").load()

        assert config.logging.level == "WARNING"
        assert config.logging.json is True
        assert config.signals.rsi_period == 9
        assert config.signals.rsi_oversold == 25
        assert config.raw["signals"] == {"rsi_period": 9, "rsi_oversold": 25}

    def test_missing_env_file_is_ignored(self, tmp_path):
        _write(tmp_path, "base.yaml", {"signals": {"rsi_period": 10}})
        config = ConfigManager(config_dir=tmp_path, env="staging").load()
        assert config.signals.rsi_period == 10

    def test_indicator_list(self, tmp_path):
        _write(tmp_path, "base.yaml", {
            "indicators": [{"type": "rsi", "period": 9}, {"type": "macd"}],
        })
        config = ConfigManager(config_dir=tmp_path).load()
        assert config.indicators == [RSIParams(period=9), MACDParams()]

    def test_override_replaces_lists(self, tmp_path):
        _write(tmp_path, "base.yaml", {"indicators": [{"type": "rsi"}, {"type": "macd"}]})
        _write(tmp_path, "dev.yaml", {"indicators": [{"type": "obv"}]})
        config = ConfigManager(config_dir=tmp_path, env="dev").load()
        assert [p.kind for p in config.indicators] == ["obv"]


class TestErrors:
    def test_invalid_signals_raise_config_error(self, tmp_path):
        _write(tmp_path, "base.yaml", {"signals": {"rsi_oversold": 90}})
        with pytest.raises(ConfigError):
            ConfigManager(config_dir=tmp_path).load()

    def test_invalid_indicator(self, tmp_path):
        _write(tmp_path, "base.yaml", {"indicators": [{"type": "rsi", "period": 0}]})
        with pytest.raises(IndicatorParamError):
            ConfigManager(config_dir=tmp_path).load()

    def test_indicators_must_be_list(self, tmp_path):
        _write(tmp_path, "base.yaml", {"indicators": {"type": "rsi"}})
        with pytest.raises(ValueError, match="list"):
            ConfigManager(config_dir=tmp_path).load()

    def test_invalid_rotation(self, tmp_path):
        _write(tmp_path, "base.yaml", {"logging": {"rotation": "weekly"}})
        with pytest.raises(ValueError, match="logging"):
            ConfigManager(config_dir=tmp_path).load()

    def test_non_mapping_file(self, tmp_path):
        (tmp_path / "base.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ValueError, match="mapping"):
            ConfigManager(config_dir=tmp_path).load()


class TestShippedConfig:
    def test_repository_config_loads(self):
        config = ConfigManager(config_dir=REPO_CONFIG_DIR, env="dev").load()

        assert config.signals == SignalDetectionConfig()
        assert config.logging.level == "DEBUG"
        assert {p.kind for p in config.indicators} >= {"rsi", "macd", "bollinger", "fibonacci"}


def test_merge_dicts():
    manager = ConfigManager()
    merged = manager._merge_dicts({"a": {"b": 1, "c": 2}, "d": 1}, {"a": {"b": 3}, "e": 4})
    assert merged == {"a": {"b": 3, "c": 2}, "d": 1, "e": 4}
