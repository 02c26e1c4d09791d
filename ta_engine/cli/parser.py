"""
Analysis CLI Argument Parser.

Defines the `analyze` and `list-indicators` subcommands.
"""

from __future__ import annotations

import argparse
from typing import Any, Optional, Sequence


class IndicatorListAction(argparse.Action):
    """Collect --indicator values, lower-cased, across repeated flags."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: str | Sequence[Any] | None,
        option_string: Optional[str] = None,
    ) -> None:
        current = list(getattr(namespace, self.dest, None) or [])
        if values is None:
            values = []
        elif isinstance(values, str):
            values = [values]
        for value in values:
            current.extend(part.strip().lower() for part in str(value).split(",") if part.strip())
        setattr(namespace, self.dest, current)


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="ta_engine",
        description="Technical analysis of OHLC(V) price data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Patterns, signals and divergences for a CSV export
    python -m ta_engine analyze prices.csv

    # Only RSI and MACD, as JSON
    python -m ta_engine analyze prices.csv --indicator rsi macd --json

    # Every configured indicator with production settings
    python -m ta_engine analyze prices.csv --indicator all --env prod

    # Registered indicators
    python -m ta_engine list-indicators
        """,
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    analyze = subparsers.add_parser(
        "analyze",
        help="Analyze an OHLC(V) CSV file",
        description=(
            "Run pattern recognition, signal detection, divergence scanning and "
            "indicators over a CSV file with open/high/low/close[/volume] columns. "
            "Without any analysis flag, patterns, signals and divergences are run."
        ),
    )
    analyze.add_argument("csv", help="CSV file with open, high, low, close (volume optional)")
    analyze.add_argument(
        "--patterns", action="store_true", help="Detect candlestick patterns"
    )
    analyze.add_argument(
        "--signals", action="store_true", help="Detect indicator signals"
    )
    analyze.add_argument(
        "--divergences", action="store_true", help="Detect price/indicator divergences"
    )
    analyze.add_argument(
        "--indicator",
        dest="indicators",
        nargs="+",
        action=IndicatorListAction,
        default=[],
        metavar="NAME",
        help="Indicators to compute (registry names, or 'all' for every configured one)",
    )
    _add_common_arguments(analyze)

    list_indicators = subparsers.add_parser(
        "list-indicators", help="List registered indicators"
    )
    _add_common_arguments(list_indicators)

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config-dir",
        default="config",
        help="Directory holding base.yaml and {env}.yaml (default: config)",
    )
    parser.add_argument(
        "--env", default="dev", help="Config environment overlay (default: dev)"
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
