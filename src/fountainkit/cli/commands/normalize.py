"""CLI command for fountainkit normalize."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fountainkit.cli.utils.cli_handler import CLIHandler
from fountainkit.config import get_logger
from fountainkit.utils import normalize_screenplay_text

logger = get_logger(__name__)
console = Console()


def normalize_command(
    path: Annotated[
        Path, typer.Argument(help="Imported screenplay text ('-' reads stdin)")
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the cleaned text to this file"),
    ] = None,
) -> None:
    """Clean up pasted or converted screenplay text.

    Repairs mojibake punctuation, rejoins hard-wrapped lines and adds the
    blank lines Fountain needs between elements.
    """
    handler = CLIHandler(console)
    try:
        normalized = normalize_screenplay_text(handler.read_screenplay(path))
        if output is None:
            print(normalized)
            return
        output.write_text(normalized + "\n", encoding="utf-8")
        handler.handle_success(f"Wrote normalized screenplay to {output}")
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e)
