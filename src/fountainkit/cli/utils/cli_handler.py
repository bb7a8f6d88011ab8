"""Unified CLI handler for standardized error handling, input and output."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from fountainkit.cli.formatters.json_formatter import JsonFormatter
from fountainkit.config import FountainKitSettings, get_logger, get_settings_for_cli
from fountainkit.exceptions import (
    ConfigurationError,
    FountainFileNotFoundError,
    FountainKitError,
    ValidationError,
)

logger = get_logger(__name__)

STDIN_PATH = "-"


class CLIHandler:
    """Unified handler for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize CLI handler.

        Args:
            console: Rich console for output
        """
        self.console = console or Console()
        self.json_formatter = JsonFormatter()

    def handle_error(
        self, error: Exception, json_output: bool = False, exit_code: int = 1
    ) -> None:
        """Handle and display errors consistently.

        Args:
            error: Exception to handle
            json_output: Whether to output JSON
            exit_code: Exit code to use

        Raises:
            typer.Exit: Always, with ``exit_code``
        """
        error_msg = str(error)
        logger.error(f"Command failed: {error_msg}", exc_info=error)

        if json_output:
            # Plain print so long messages are never wrapped mid-string
            print(self.json_formatter.format_error_response(error, exit_code))
        elif isinstance(error, ValidationError):
            self.console.print(f"[red]Validation {escape(error_msg)}[/red]")
        elif isinstance(error, FountainKitError):
            # Already formatted with its hint and details
            self.console.print(f"[red]{escape(error_msg)}[/red]")
        else:
            self.console.print(f"[red]Error: {escape(error_msg)}[/red]")

        raise typer.Exit(exit_code)

    def handle_success(
        self, message: str, data: Any = None, json_output: bool = False
    ) -> None:
        """Handle success responses consistently.

        Args:
            message: Success message
            data: Optional data to include
            json_output: Whether to output JSON
        """
        if json_output:
            print(self.json_formatter.format_success(message, data))
        else:
            self.console.print(f"[green]{escape(message)}[/green]")

    def print_json(self, data: Any) -> None:
        """Print data as JSON without ANSI escape codes."""
        print(self.json_formatter.format(data))

    def load_settings(self, config: Path | None = None) -> FountainKitSettings:
        """Resolve settings for a command, honouring ``--config``.

        Args:
            config: Optional configuration file

        Returns:
            Settings merged from the standard sources and ``config``

        Raises:
            ConfigurationError: If the configuration file does not exist
        """
        try:
            return get_settings_for_cli(config_file=config)
        except FileNotFoundError as e:
            raise ConfigurationError(
                message=f"Config file not found: {config}",
                hint="Pass an existing YAML, TOML or JSON file to --config",
                details={"config_file": str(config)},
            ) from e

    def read_stdin(self, required: bool = True) -> str | None:
        """Read content from stdin.

        Args:
            required: Whether stdin content is required

        Returns:
            Content from stdin or None

        Raises:
            ValidationError: If required and stdin is an interactive terminal
        """
        if sys.stdin.isatty():
            if required:
                raise ValidationError(
                    message="No input provided",
                    hint="Pass a Fountain file or pipe the screenplay through stdin",
                )
            return None
        return sys.stdin.read()

    def read_screenplay(self, path: Path) -> str:
        """Read screenplay text from a file, or from stdin for ``-``.

        Undecodable bytes become replacement characters, which the
        normalizer knows how to repair.

        Args:
            path: Screenplay file path

        Returns:
            The screenplay text

        Raises:
            FountainFileNotFoundError: If the file does not exist
        """
        if str(path) == STDIN_PATH:
            return self.read_stdin() or ""
        if not path.is_file():
            raise FountainFileNotFoundError(path)
        logger.debug(f"Reading screenplay: {path}")
        return path.read_text(encoding="utf-8", errors="replace")
