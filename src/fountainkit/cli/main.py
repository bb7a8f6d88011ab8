"""Main CLI entry point for fountainkit."""

from __future__ import annotations

from typing import Annotated, Any

import typer
from rich.console import Console

from fountainkit import __version__
from fountainkit.cli.commands import (
    extract_command,
    fix_command,
    normalize_command,
    parse_command,
    scene_command,
    stats_command,
    validate_command,
)
from fountainkit.cli.formatters.json_formatter import JsonFormatter
from fountainkit.config import (
    configure_logging,
    get_logger,
    get_settings_for_cli,
    set_settings,
)

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="fountainkit",
    help="Fountain screenplay parsing, validation, correction and import",
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="parse")(parse_command)
app.command(name="extract")(extract_command)
app.command(name="validate")(validate_command)
app.command(name="fix")(fix_command)
app.command(name="stats")(stats_command)
app.command(name="normalize")(normalize_command)
app.command(name="scene")(scene_command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show fountainkit version."""
    version_info = {
        "name": "fountainkit",
        "version": __version__,
        "description": "Fountain screenplay parsing, validation and correction",
    }

    if json_output:
        # Output pure JSON without ANSI escape codes
        print(JsonFormatter().format(version_info))
    else:
        console.print(f"fountainkit v{version_info['version']}")


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging (INFO level)"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug", help="Enable debug logging", envvar="FOUNTAINKIT_DEBUG"
        ),
    ] = False,
) -> None:
    """Configure global options."""
    if not (debug or verbose):
        return

    overrides: dict[str, Any] = {"log_level": "INFO"}
    if debug:
        overrides = {"debug": True, "log_level": "DEBUG"}
    settings = get_settings_for_cli(cli_overrides=overrides)
    set_settings(settings)
    configure_logging(settings)
    if debug:
        logger.debug("Debug mode enabled")
    else:
        logger.info("Verbose mode enabled")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
