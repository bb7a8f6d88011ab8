"""Shared helpers for fountainkit CLI commands."""

from __future__ import annotations

from fountainkit.cli.utils.cli_handler import CLIHandler

__all__ = ["CLIHandler"]
