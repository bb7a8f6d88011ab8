"""CLI command for fountainkit extract."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fountainkit.cli.formatters.table_formatter import TableFormatter
from fountainkit.cli.utils.cli_handler import CLIHandler
from fountainkit.config import get_logger
from fountainkit.extraction import (
    AutoImportResult,
    EntityExtractor,
    format_character_name,
    should_auto_import,
)

logger = get_logger(__name__)
console = Console()


def _display_result(result: AutoImportResult) -> None:
    """Print an extraction result as tables."""
    console.print(
        f"[bold cyan]Extracted {len(result.scenes)} scenes, "
        f"{len(result.locations)} locations and "
        f"{len(result.characters)} characters[/bold cyan]\n"
    )

    TableFormatter(console, title="Scenes").print(
        [
            {
                "lines": f"{scene.start_line + 1}-{scene.end_line + 1}",
                "heading": scene.heading,
                "type": scene.location_type.value,
                "characters": ", ".join(scene.characters),
            }
            for scene in result.scenes
        ]
    )
    TableFormatter(console, title="Characters").print(
        [
            {
                "name": format_character_name(name),
                "description": result.character_descriptions.get(name, ""),
                "aliases": ", ".join(
                    alias
                    for alias, canonical in result.name_map.items()
                    if canonical == name and alias != name
                ),
            }
            for name in result.characters
        ]
    )

    if result.questionable_items:
        TableFormatter(console, title="Needs review").print(
            [
                {
                    "line": item.line_number,
                    "kind": item.type.value,
                    "text": item.text,
                    "reason": item.reason,
                    "suggestion": item.suggestion or "",
                }
                for item in result.questionable_items
            ]
        )


def extract_command(
    path: Annotated[
        Path, typer.Argument(help="Fountain file to import ('-' reads stdin)")
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
) -> None:
    """Extract scenes, locations and characters from a screenplay."""
    handler = CLIHandler(console)
    try:
        settings = handler.load_settings(config)
        document = handler.read_screenplay(path)
        if not should_auto_import(document):
            logger.warning("No scene headings found", path=str(path))

        result = EntityExtractor(settings).extract(document)
        if json_output:
            handler.print_json(result)
        else:
            _display_result(result)
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e, json_output)
