"""CLI command for fountainkit validate."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from fountainkit.cli.formatters.table_formatter import TableFormatter
from fountainkit.cli.utils.cli_handler import CLIHandler
from fountainkit.config import get_logger
from fountainkit.validators import FormatValidator, get_issue_summary

logger = get_logger(__name__)
console = Console()


def validate_command(
    path: Annotated[
        Path, typer.Argument(help="Fountain file to check ('-' reads stdin)")
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 1 when any issue is found"),
    ] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
) -> None:
    """Report Fountain formatting problems and their suggested fixes."""
    handler = CLIHandler(console)
    try:
        settings = handler.load_settings(config)
        document = handler.read_screenplay(path)
        result = FormatValidator(settings).validate(document)

        if json_output:
            handler.print_json(result)
        elif result.is_valid:
            console.print(
                f"[green]{escape(str(path))}: no formatting issues found[/green]"
            )
        else:
            TableFormatter(console, title=f"Issues in {path}").print(
                [
                    {
                        "line": issue.line_number,
                        "severity": issue.severity.value,
                        "type": issue.type.value,
                        "description": issue.description,
                        "fix": issue.suggested_fix.text if issue.suggested_fix else "",
                    }
                    for issue in result.issues
                ]
            )
            summary = ", ".join(
                f"{count} {issue_type}"
                for issue_type, count in get_issue_summary(result.issues).items()
                if count
            )
            console.print(f"{len(result.issues)} issues ({summary})")
            if result.has_auto_fixable_issues:
                console.print(
                    f"Run [bold]fountainkit fix {escape(str(path))}[/bold] "
                    "to apply the fixes"
                )
        if strict and not result.is_valid:
            raise typer.Exit(1)
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e, json_output)
