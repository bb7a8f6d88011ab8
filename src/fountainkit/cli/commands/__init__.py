"""fountainkit CLI commands."""

from __future__ import annotations

from fountainkit.cli.commands.extract import extract_command
from fountainkit.cli.commands.fix import fix_command
from fountainkit.cli.commands.normalize import normalize_command
from fountainkit.cli.commands.parse import parse_command
from fountainkit.cli.commands.scene import scene_command
from fountainkit.cli.commands.stats import stats_command
from fountainkit.cli.commands.validate import validate_command

__all__ = [
    "extract_command",
    "fix_command",
    "normalize_command",
    "parse_command",
    "scene_command",
    "stats_command",
    "validate_command",
]
