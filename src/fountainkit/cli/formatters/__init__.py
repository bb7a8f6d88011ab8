"""Output formatters for the fountainkit CLI."""

from __future__ import annotations

from fountainkit.cli.formatters.base import OutputFormat, OutputFormatter
from fountainkit.cli.formatters.json_formatter import JsonFormatter
from fountainkit.cli.formatters.table_formatter import TableFormatter

__all__ = [
    "JsonFormatter",
    "OutputFormat",
    "OutputFormatter",
    "TableFormatter",
]
