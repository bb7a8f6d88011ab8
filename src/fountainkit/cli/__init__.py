"""fountainkit command line interface.

Each command lives in its own module under :mod:`fountainkit.cli.commands`
and is registered on the Typer app in :mod:`fountainkit.cli.main`.
"""

from __future__ import annotations

from .main import app, main

__all__ = ["app", "main"]
