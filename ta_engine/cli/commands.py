"""
Analysis CLI Commands.

Command handlers for `python -m ta_engine`. Handlers print to stdout and
return the process exit code; input problems (missing file, missing OHLC
columns, invalid configuration) are reported on stderr with exit code 2.
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config import AppConfig, ConfigManager, LoggingConfig
from ta_engine.domain.signals import (
    Bar,
    ConfigError,
    DivergenceSignal,
    FibonacciResult,
    IndicatorEngine,
    PatternMatch,
    SeriesSet,
    SignalDetectionConfig,
    TechnicalSignal,
    bars_from_frame,
    detect_all_divergences,
    detect_patterns,
    detect_signals,
)
from ta_engine.domain.signals.data.frames import PRICE_COLUMNS
from ta_engine.domain.signals.indicators import DEFAULT_INDICATOR_CONFIGS, IndicatorParams
from ta_engine.domain.signals.indicators.base import IndicatorParamError
from ta_engine.utils.logging_setup import get_logger, setup_logging, shutdown_logging

from .parser import create_parser

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2

DIRECTION_STYLES = {"bullish": "green", "bearish": "red", "neutral": "yellow"}


class InputError(Exception):
    """Unusable command input (file, columns, indicator names or config)."""


# =============================================================================
# Input
# =============================================================================


def load_app_config(config_dir: str, env: str) -> AppConfig:
    """
    Load configuration, falling back to defaults when config_dir has no base.yaml.

    Raises:
        InputError: If the configuration files are invalid
    """
    if not (Path(config_dir) / "base.yaml").exists():
        logger.debug(f"No base.yaml in {config_dir}, using default configuration")
        return AppConfig(
            logging=LoggingConfig(),
            signals=SignalDetectionConfig(),
            indicators=list(DEFAULT_INDICATOR_CONFIGS),
        )
    try:
        return ConfigManager(config_dir=config_dir, env=env).load()
    except (ConfigError, ValueError) as e:
        raise InputError(f"Invalid configuration in {config_dir}: {e}") from e


def load_bars(path: str) -> Tuple[Bar, ...]:
    """
    Read an OHLC(V) CSV file into bars.

    Raises:
        InputError: If the file is missing or lacks open/high/low/close columns
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise InputError(f"Input file not found: {path}")

    frame = pd.read_csv(csv_path)
    columns = {str(c).strip().lower() for c in frame.columns}
    missing = [c for c in PRICE_COLUMNS if c not in columns]
    if missing:
        raise InputError(f"{path} is missing required columns: {', '.join(missing)}")

    frame.columns = [str(c).strip().lower() for c in frame.columns]
    return bars_from_frame(frame)


def select_indicator_configs(
    names: Sequence[str],
    app_config: AppConfig,
    engine: IndicatorEngine,
) -> List[IndicatorParams]:
    """
    Resolve --indicator names to parameter sets.

    "all" selects every configured indicator. Other names select the
    configured parameter sets of that kind, or the indicator defaults when
    none is configured.

    Raises:
        InputError: If a name is not a registered indicator
    """
    if "all" in names:
        return list(app_config.indicators)

    selected: List[IndicatorParams] = []
    for name in names:
        indicator = engine.registry.get(name)
        if indicator is None:
            raise InputError(
                f"Unknown indicator '{name}' (available: {', '.join(sorted(engine.registry.get_names()))})"
            )
        configured = [p for p in app_config.indicators if p.kind == name]
        selected.extend(configured or [indicator.default_params])
    return selected


# =============================================================================
# Output helpers
# =============================================================================


def latest_values(result: Any) -> Dict[str, Optional[float]]:
    """Most recent value of each series in an indicator result."""
    if isinstance(result, FibonacciResult):
        return {level.label: level.price for level in result.levels}
    if isinstance(result, SeriesSet):
        return {name: points[-1].value if points else None for name, points in result.series().items()}
    return {"value": result[-1].value if result else None}


def result_to_dict(result: Any) -> Any:
    if isinstance(result, (FibonacciResult, SeriesSet)):
        return result.to_dict()
    return [point.to_dict() for point in result]


def _fmt(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:,.4f}"


def _direction(value: str) -> str:
    style = DIRECTION_STYLES.get(value, "white")
    return f"[{style}]{value}[/{style}]"


def _patterns_table(patterns: List[PatternMatch]) -> Table:
    table = Table(title=f"Candlestick Patterns ({len(patterns)})")
    table.add_column("Bar", justify="right")
    table.add_column("Pattern", style="cyan")
    table.add_column("Direction")
    table.add_column("Reliability")
    table.add_column("Description", style="dim")
    for match in patterns:
        table.add_row(
            str(match.end_index),
            match.name,
            _direction(match.direction.value),
            match.reliability.value,
            match.description,
        )
    return table


def _signals_table(signals: List[TechnicalSignal]) -> Table:
    table = Table(title=f"Signals ({len(signals)})")
    table.add_column("Date")
    table.add_column("Indicator", style="cyan")
    table.add_column("Type")
    table.add_column("Direction")
    table.add_column("Strength")
    table.add_column("Value", justify="right")
    table.add_column("Description", style="dim")
    for signal in signals:
        table.add_row(
            str(signal.date),
            signal.indicator,
            signal.kind.value,
            _direction(signal.direction.value),
            signal.strength.value,
            _fmt(signal.value),
            signal.description,
        )
    return table


def _divergences_table(divergences: List[DivergenceSignal]) -> Table:
    table = Table(title=f"Divergences ({len(divergences)})")
    table.add_column("Indicator", style="cyan")
    table.add_column("Type")
    table.add_column("From")
    table.add_column("To")
    table.add_column("Price", justify="right")
    table.add_column("Confidence", justify="right")
    for divergence in divergences:
        table.add_row(
            divergence.indicator.value,
            _direction(divergence.kind.value),
            str(divergence.start_date),
            str(divergence.end_date),
            f"{_fmt(divergence.price_start)} -> {_fmt(divergence.price_end)}",
            f"{divergence.confidence:.0%}",
        )
    return table


def _indicators_table(results: Dict[str, Any]) -> Table:
    table = Table(title="Indicators (latest bar)")
    table.add_column("Indicator", style="cyan")
    table.add_column("Series")
    table.add_column("Value", justify="right")
    for key, result in results.items():
        for series_name, value in latest_values(result).items():
            table.add_row(key, series_name, _fmt(value))
    return table


# =============================================================================
# Commands
# =============================================================================


def cmd_analyze(args: argparse.Namespace, app_config: AppConfig, console: Console) -> int:
    bars = load_bars(args.csv)
    engine = IndicatorEngine()
    indicator_configs = select_indicator_configs(args.indicators, app_config, engine)

    run_all = not (args.patterns or args.signals or args.divergences or args.indicators)
    report: Dict[str, Any] = {"bars": len(bars)}

    if run_all or args.patterns:
        report["patterns"] = detect_patterns(bars)
    if run_all or args.signals:
        report["signals"] = detect_signals(bars, app_config.signals)
    if run_all or args.divergences:
        report["divergences"] = detect_all_divergences(bars, app_config.signals.divergence_lookback)
    if indicator_configs:
        report["indicators"] = engine.compute(bars, indicator_configs)

    logger.info(f"Analyzed {len(bars)} bars from {args.csv}")

    if args.json:
        payload: Dict[str, Any] = {"bars": report["bars"]}
        for section in ("patterns", "signals", "divergences"):
            if section in report:
                payload[section] = [item.to_dict() for item in report[section]]
        if "indicators" in report:
            payload["indicators"] = {
                key: result_to_dict(result) for key, result in report["indicators"].items()
            }
        print(json.dumps(payload, indent=2, default=str))
        return EXIT_OK

    console.print(f"[bold]{args.csv}[/bold]: {len(bars)} bars")
    if "patterns" in report:
        console.print(_patterns_table(report["patterns"]))
    if "signals" in report:
        console.print(_signals_table(report["signals"]))
    if "divergences" in report:
        console.print(_divergences_table(report["divergences"]))
    if "indicators" in report:
        console.print(_indicators_table(report["indicators"]))
    return EXIT_OK


def cmd_list_indicators(args: argparse.Namespace, app_config: AppConfig, console: Console) -> int:
    registry = IndicatorEngine().registry
    indicators = sorted(registry.get_all(), key=lambda ind: (ind.category.value, ind.name))

    if args.json:
        print(
            json.dumps(
                [
                    {
                        "name": ind.name,
                        "category": ind.category.value,
                        "required_fields": list(ind.required_fields),
                        "warmup": ind.warmup_periods(),
                    }
                    for ind in indicators
                ],
                indent=2,
            )
        )
        return EXIT_OK

    table = Table(title=f"Registered Indicators ({len(indicators)})")
    table.add_column("Name", style="cyan")
    table.add_column("Category")
    table.add_column("Fields")
    table.add_column("Warmup", justify="right")
    for ind in indicators:
        table.add_row(
            ind.name,
            ind.category.value,
            ", ".join(ind.required_fields),
            str(ind.warmup_periods()),
        )
    console.print(table)
    return EXIT_OK


COMMANDS = {
    "analyze": cmd_analyze,
    "list-indicators": cmd_list_indicators,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console()
    error_console = Console(stderr=True)

    try:
        app_config = load_app_config(args.config_dir, args.env)
        setup_logging(app_config.logging, verbose=args.verbose)
        return COMMANDS[args.command](args, app_config, console)
    except (InputError, IndicatorParamError) as e:
        error_console.print(f"[red]error:[/red] {escape(str(e))}", soft_wrap=True)
        return EXIT_INPUT_ERROR
    finally:
        shutdown_logging()
