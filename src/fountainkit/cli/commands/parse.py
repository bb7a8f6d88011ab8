"""CLI command for fountainkit parse."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fountainkit.cli.formatters.table_formatter import TableFormatter
from fountainkit.cli.utils.cli_handler import CLIHandler
from fountainkit.config import get_logger
from fountainkit.parser import ElementType, FountainParser

logger = get_logger(__name__)
console = Console()


def parse_command(
    path: Annotated[
        Path, typer.Argument(help="Fountain file to parse ('-' reads stdin)")
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    include_empty: Annotated[
        bool, typer.Option("--include-empty", help="Also list blank lines")
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
) -> None:
    """Classify every line of a screenplay."""
    handler = CLIHandler(console)
    try:
        settings = handler.load_settings(config)
        document = handler.read_screenplay(path)
        elements = FountainParser(settings).parse(document)
        if not include_empty:
            elements = [e for e in elements if e.type != ElementType.EMPTY]

        rows = [
            {"line": e.line_number, "type": e.type.value, "text": e.text}
            for e in elements
        ]
        if json_output:
            handler.print_json(rows)
        else:
            TableFormatter(console, title=f"Elements in {path}").print(rows)
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e, json_output)
