"""CLI command for fountainkit scene."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from fountainkit.cli.utils.cli_handler import CLIHandler
from fountainkit.config import get_logger
from fountainkit.parser import FountainParser

logger = get_logger(__name__)
console = Console()


def scene_command(
    path: Annotated[Path, typer.Argument(help="Fountain file ('-' reads stdin)")],
    cursor: Annotated[
        int | None,
        typer.Option(
            "--cursor",
            help="Character offset into the file (default: end of file)",
            min=0,
        ),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
) -> None:
    """Show the scene around a cursor position and its estimated act."""
    handler = CLIHandler(console)
    try:
        settings = handler.load_settings(config)
        document = handler.read_screenplay(path)
        position = len(document) if cursor is None else cursor

        parser = FountainParser(settings)
        context = parser.get_current_scene_context(document, position)
        estimate = parser.detect_scene_from_cursor(document, position)

        if json_output:
            handler.print_json(
                {
                    "cursor": position,
                    "scene_heading": context.scene_heading,
                    "act": estimate.act,
                    "characters": context.characters,
                    "story_beats": context.story_beats,
                }
            )
            return

        if context.scene_heading is None:
            console.print("[yellow]Cursor is not inside a scene[/yellow]")
            return

        console.print(
            f"[bold cyan]{escape(context.scene_heading)}[/bold cyan] "
            f"(act {estimate.act})"
        )
        console.print(f"Characters: {escape(', '.join(context.characters)) or '-'}")
        for beat in context.story_beats:
            console.print(f"  - {escape(beat)}")
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e, json_output)
