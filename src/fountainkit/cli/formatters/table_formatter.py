"""Table output formatter for CLI."""

from __future__ import annotations

import io
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from fountainkit.cli.formatters.base import OutputFormat, OutputFormatter


class TableFormatter(OutputFormatter[list[dict[str, Any]]]):
    """Formatter for rows of screenplay data."""

    def __init__(
        self, console: Console | None = None, title: str | None = None
    ) -> None:
        """Initialize formatter.

        Args:
            console: Rich console for output
            title: Optional table title
        """
        super().__init__(console)
        self.title = title

    def format(
        self, data: list[dict[str, Any]], format_type: OutputFormat = OutputFormat.TABLE
    ) -> str:
        """Format rows as a Rich table rendered to text.

        Args:
            data: List of dictionaries, one per row
            format_type: Output format type (text and table render the same)

        Returns:
            Rendered table
        """
        if not data:
            return "No data to display"

        table = self.build_table(data)
        string_io = io.StringIO()
        temp_console = Console(file=string_io, width=self.console.width)
        temp_console.print(table)
        return string_io.getvalue()

    def build_table(self, data: list[dict[str, Any]]) -> Table:
        """Build a Rich table from rows, columns taken from the first row."""
        columns = list(data[0].keys())
        table = Table(title=self.title, show_header=True, header_style="bold magenta")
        for col in columns:
            table.add_column(col.replace("_", " ").title())
        for row in data:
            table.add_row(*[escape(str(row.get(col, ""))) for col in columns])
        return table

    def print(
        self, data: list[dict[str, Any]], format_type: OutputFormat = OutputFormat.TABLE
    ) -> None:
        """Print rows straight to the console."""
        if not data:
            self.console.print("[yellow]No data to display[/yellow]")
            return
        self.console.print(self.build_table(data))
