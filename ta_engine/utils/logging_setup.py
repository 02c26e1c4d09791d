"""
Logging setup with categories and file rotation.

Provides:
- 4 log categories: indicators, patterns, signals, system
- Automatic module -> category routing
- Console output with optional colors
- JSON or standard text formatting
- Optional file logging with size-based or time-based rotation
- Configurable timezone for log timestamps

Categories:
- indicators: Indicator registry, engine and calculations
- patterns: Candlestick pattern recognition
- signals: Signal rules, divergence detection, signal configuration
- system: CLI, configuration loading, everything else

Library modules only ask for a logger; handlers are installed by
setup_logging(), which the CLI calls.
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

if TYPE_CHECKING:
    from config.models import LoggingConfig

# =============================================================================
# GLOBAL STATE
# =============================================================================

# Global timezone setting for log timestamps (None = local time)
_log_timezone: Optional[ZoneInfo] = None

# Configured category loggers
_category_loggers: Dict[str, logging.Logger] = {}

# =============================================================================
# LOG CATEGORIES AND ROUTING
# =============================================================================

ROOT_LOGGER_NAME = "ta"

CATEGORIES = ["indicators", "patterns", "signals", "system"]

# Module path -> category routing
# More specific paths should come first
MODULE_ROUTING: List[Tuple[str, str]] = [
    ("ta_engine.domain.signals.indicators", "indicators"),
    ("ta_engine.domain.signals.indicator_engine", "indicators"),
    ("ta_engine.domain.signals.data", "indicators"),
    ("ta_engine.domain.signals.patterns", "patterns"),
    ("ta_engine.domain.signals.rules", "signals"),
    ("ta_engine.domain.signals.divergence", "signals"),
    ("ta_engine.domain.signals.signal_detector", "signals"),
    ("ta_engine.domain.signals.config", "signals"),
    ("ta_engine.cli", "system"),
    ("config", "system"),
    # Default fallback
    ("ta_engine", "system"),
]


def get_category_for_module(module_name: str) -> str:
    """
    Determine the log category for a given module name.

    Args:
        module_name: Full module path (e.g., "ta_engine.domain.signals.patterns.recognizer").

    Returns:
        Category name (indicators, patterns, signals, or system).
    """
    for prefix, category in MODULE_ROUTING:
        if module_name.startswith(prefix):
            return category
    return "system"


# =============================================================================
# TIMEZONE SUPPORT
# =============================================================================


def set_log_timezone(tz: Optional[str] = None) -> None:
    """
    Set the timezone for log timestamps.

    Args:
        tz: Timezone name (e.g., "Europe/Berlin", "UTC").
            None or "local" uses local system time.
    """
    global _log_timezone
    if tz is None or tz == "local":
        _log_timezone = None
    else:
        _log_timezone = ZoneInfo(tz)


def get_current_timestamp() -> str:
    """ISO format timestamp in the configured timezone."""
    if _log_timezone is not None:
        return datetime.now(_log_timezone).isoformat()
    return datetime.now().isoformat()


# =============================================================================
# FORMATTERS
# =============================================================================


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Formats log records as single-line JSON with:
    - Timestamp (with timezone)
    - Level
    - Category (derived from logger name)
    - Message
    - Extra data (record.data)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "ts": get_current_timestamp(),
            "level": record.levelname,
            "cat": self._get_category(record.name),
            "msg": record.getMessage(),
        }

        if hasattr(record, "data") and record.data:
            log_entry["data"] = record.data

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)

    def _get_category(self, logger_name: str) -> str:
        """Extract category from logger name."""
        if logger_name.startswith(f"{ROOT_LOGGER_NAME}."):
            parts = logger_name.split(".")
            if len(parts) >= 2 and parts[1] in CATEGORIES:
                return parts[1]
        return "system"


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter with color support.

    Format: [LEVEL  ] [category] message
    """

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        category = record.name.split(".")[-1]
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if self.use_colors:
            color = self.COLORS.get(level, "")
            return f"{color}[{level:7}]{self.RESET} [{category}] {message}"
        return f"[{level:7}] [{category}] {message}"


# =============================================================================
# LOGGER FACTORY
# =============================================================================


def get_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for the given module, automatically routed to the correct category.

    Args:
        module_name: Module name (typically __name__).

    Returns:
        Category logger ("ta.<category>").

    Example:
        from ta_engine.utils.logging_setup import get_logger
        logger = get_logger(__name__)
        logger.debug("Detected 3 patterns")
    """
    category = get_category_for_module(module_name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{category}")


# =============================================================================
# SETUP
# =============================================================================


def _build_file_handler(config: LoggingConfig) -> logging.Handler:
    log_path = Path(config.file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if config.rotation == "time":
        return logging.handlers.TimedRotatingFileHandler(
            filename=str(log_path),
            when=config.when,
            interval=config.interval,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    return logging.handlers.RotatingFileHandler(
        filename=str(log_path),
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )


def setup_logging(config: LoggingConfig, verbose: bool = False) -> Dict[str, logging.Logger]:
    """
    Configure the category loggers.

    Handlers are attached to the "ta" parent logger; category loggers
    propagate to it. Calling again replaces previously installed handlers.

    Args:
        config: Logging configuration.
        verbose: Force DEBUG level.

    Returns:
        Dict mapping category name to logger.
    """
    set_log_timezone(config.timezone)
    level_name = "DEBUG" if verbose else config.level.upper()
    level = getattr(logging, level_name, logging.INFO)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
    root.setLevel(level)
    root.propagate = False

    formatter: logging.Formatter
    if config.json:
        formatter = JSONFormatter()
    else:
        formatter = ConsoleFormatter(use_colors=config.color and sys.stderr.isatty())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if config.file:
        file_handler = _build_file_handler(config)
        file_handler.setFormatter(JSONFormatter())
        root.addHandler(file_handler)

    for category in CATEGORIES:
        logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{category}")
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
        _category_loggers[category] = logger

    return _category_loggers


def get_category_loggers() -> Dict[str, logging.Logger]:
    """Get all configured category loggers."""
    return _category_loggers


def shutdown_logging() -> None:
    """Flush and close all installed handlers."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root.handlers[:]:
        handler.flush()
        handler.close()
        root.removeHandler(handler)
