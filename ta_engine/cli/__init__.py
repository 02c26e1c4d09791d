"""Command-line interface for the analysis engine."""

from .commands import main
from .parser import create_parser

__all__ = ["create_parser", "main"]
