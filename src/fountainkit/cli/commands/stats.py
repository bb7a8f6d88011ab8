"""CLI command for fountainkit stats."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from fountainkit.cli.formatters.table_formatter import TableFormatter
from fountainkit.cli.utils.cli_handler import CLIHandler
from fountainkit.config import FountainKitSettings, get_logger
from fountainkit.parser import ElementType, FountainParser
from fountainkit.parser.line_classifier import clean_character_name
from fountainkit.utils import ScreenplayUtils

logger = get_logger(__name__)
console = Console()


def collect_stats(document: str, settings: FountainKitSettings) -> dict[str, Any]:
    """Summarise a screenplay document.

    Args:
        document: Raw Fountain text
        settings: Settings providing the page length

    Returns:
        Counts of scenes, characters, words and elements plus a page estimate
    """
    elements = FountainParser(settings).parse(document)
    counts = Counter(element.type for element in elements)
    speakers = {
        clean_character_name(element.text)
        for element in elements
        if element.type == ElementType.CHARACTER
    }
    characters = ScreenplayUtils.character_count(document)

    return {
        "scenes": counts[ElementType.SCENE_HEADING],
        "speaking_characters": len(speakers),
        "dialogue_lines": counts[ElementType.DIALOGUE],
        "action_lines": counts[ElementType.ACTION],
        "words": ScreenplayUtils.count_words(document),
        "characters_with_spaces": characters.with_spaces,
        "characters_without_spaces": characters.without_spaces,
        "estimated_pages": ScreenplayUtils.estimate_page_count(
            document, settings.lines_per_page
        ),
        "elements": {
            element_type.value: counts[element_type]
            for element_type in ElementType
            if counts[element_type]
        },
    }


def stats_command(
    path: Annotated[
        Path, typer.Argument(help="Fountain file to measure ('-' reads stdin)")
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
) -> None:
    """Show scene, character, word and page counts for a screenplay."""
    handler = CLIHandler(console)
    try:
        settings = handler.load_settings(config)
        stats = collect_stats(handler.read_screenplay(path), settings)

        if json_output:
            handler.print_json(stats)
            return

        element_counts = stats.pop("elements")
        console.print(
            f"[bold cyan]Statistics for {escape(str(path))}[/bold cyan]\n"
        )
        for key, value in stats.items():
            formatted_key = key.replace("_", " ").title()
            console.print(f"  {formatted_key}: {value}")
        console.print()
        TableFormatter(console, title="Elements").print(
            [
                {"element": element, "count": count}
                for element, count in element_counts.items()
            ]
        )
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e, json_output)
