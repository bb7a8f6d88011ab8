"""CLI command for fountainkit fix."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from fountainkit.cli.utils.cli_handler import CLIHandler
from fountainkit.config import get_logger
from fountainkit.correction import CorrectionResult, FormatCorrector
from fountainkit.exceptions import ValidationError
from fountainkit.validators import FormatIssue, FormatValidator, IssueSeverity

logger = get_logger(__name__)
console = Console()

# Lower rank is more severe
SEVERITY_RANK = {
    IssueSeverity.ERROR: 0,
    IssueSeverity.WARNING: 1,
    IssueSeverity.INFO: 2,
}


def filter_by_severity(
    issues: list[FormatIssue], min_severity: IssueSeverity
) -> list[FormatIssue]:
    """Keep the issues at least as severe as ``min_severity``."""
    limit = SEVERITY_RANK[min_severity]
    return [issue for issue in issues if SEVERITY_RANK[issue.severity] <= limit]


def fix_command(
    path: Annotated[
        Path, typer.Argument(help="Fountain file to correct ('-' reads stdin)")
    ],
    quick: Annotated[
        bool,
        typer.Option(
            "--quick", help="Only uppercase headings and add missing times of day"
        ),
    ] = False,
    smart: Annotated[
        bool,
        typer.Option(
            "--smart",
            help="Quick fixes plus character name casing and spacing clean-up",
        ),
    ] = False,
    min_severity: Annotated[
        IssueSeverity,
        typer.Option(
            "--min-severity",
            help="Apply fixes for issues at least this severe",
            case_sensitive=False,
        ),
    ] = IssueSeverity.INFO,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output", "-o", help="Write the corrected screenplay to this file"
        ),
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to configuration file"),
    ] = None,
) -> None:
    """Correct Fountain formatting problems.

    By default the validator runs and every suggested fix at or above
    --min-severity is applied, followed by the blank-line clean-up.
    The corrected text goes to stdout unless --output is given.
    """
    handler = CLIHandler(console)
    try:
        if quick and smart:
            raise ValidationError(
                "--quick and --smart cannot be combined",
                hint="Pick one correction mode, or neither for the full pass",
            )
        settings = handler.load_settings(config)
        document = handler.read_screenplay(path)
        corrector = FormatCorrector(settings)

        if quick:
            result = CorrectionResult(corrector.quick_correct(document))
        elif smart:
            result = CorrectionResult(corrector.smart_format(document))
        else:
            issues = FormatValidator(settings).validate(document).issues
            result = corrector.correct(
                document, filter_by_severity(issues, min_severity)
            )

        if output is not None:
            output.write_text(result.corrected_content, encoding="utf-8")
            logger.info("Wrote corrected screenplay", path=str(output))

        if json_output:
            handler.print_json(result)
        elif output is not None:
            handler.handle_success(
                f"Applied {result.change_count} fixes, wrote {output}"
            )
        else:
            print(result.corrected_content)
    except typer.Exit:
        raise
    except Exception as e:
        handler.handle_error(e, json_output)
