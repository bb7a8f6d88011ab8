"""Pytest configuration and fixtures."""

import json
import re
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner, Result

from fountainkit.config import FountainKitSettings, reset_settings, set_settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")


def strip_ansi_codes(text: str) -> str:
    """Strip ANSI escape sequences from CLI output."""
    return ANSI_ESCAPE.sub("", text)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run every test with default settings, ignoring user config files."""
    for name in (
        "FOUNTAINKIT_DEBUG",
        "FOUNTAINKIT_LOG_LEVEL",
        "FOUNTAINKIT_DEFAULT_TIME_OF_DAY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    reset_settings()
    set_settings(FountainKitSettings())
    yield
    reset_settings()


@pytest.fixture
def settings():
    """Default settings instance."""
    return FountainKitSettings()


class CleanResult:
    """A wrapper around CliRunner Result that strips ANSI codes."""

    def __init__(self, result: Result):
        """Initialize with a CliRunner result."""
        self._result = result

    @property
    def exit_code(self) -> int:
        """Return the exit code from the wrapped result."""
        return self._result.exit_code

    @property
    def exception(self) -> BaseException | None:
        """Return any exception from the wrapped result."""
        return self._result.exception

    @property
    def stdout(self) -> str:
        """Return the cleaned stdout."""
        return strip_ansi_codes(self._result.stdout)

    def assert_success(self) -> "CleanResult":
        """Assert that the command succeeded (exit code 0)."""
        assert self.exit_code == 0, (
            f"Command failed with exit code {self.exit_code}.\n"
            f"Output: {self.stdout}\nException: {self.exception!r}"
        )
        return self

    def assert_failure(self, exit_code: int = 1) -> "CleanResult":
        """Assert that the command failed with ``exit_code``."""
        assert self.exit_code == exit_code, (
            f"Expected exit code {exit_code}, got {self.exit_code}.\n"
            f"Output: {self.stdout}"
        )
        return self

    def parse_json(self) -> dict[str, Any] | list[Any]:
        """Parse stdout as JSON."""
        try:
            return json.loads(self.stdout)
        except json.JSONDecodeError as e:
            raise AssertionError(
                f"Failed to parse output as JSON: {e}\nOutput: {self.stdout}"
            ) from e


@pytest.fixture
def cli_invoke():
    """Invoke the fountainkit CLI and return a CleanResult."""
    from fountainkit.cli.main import app

    runner = CliRunner()

    def invoke(*args: str, **kwargs: Any) -> CleanResult:
        return CleanResult(runner.invoke(app, list(args), **kwargs))

    return invoke


@pytest.fixture
def sample_screenplay():
    """Well-formed sample screenplay text."""
    return (FIXTURES_DIR / "coffee_shop.fountain").read_text(encoding="utf-8")


@pytest.fixture
def messy_screenplay():
    """Screenplay with the usual formatting mistakes."""
    return (FIXTURES_DIR / "messy_script.fountain").read_text(encoding="utf-8")


@pytest.fixture
def screenplay_file(tmp_path, sample_screenplay):
    """Sample screenplay written to a temporary file."""
    path = tmp_path / "coffee_shop.fountain"
    path.write_text(sample_screenplay, encoding="utf-8")
    return path


@pytest.fixture
def messy_file(tmp_path, messy_screenplay):
    """Messy screenplay written to a temporary file."""
    path = tmp_path / "messy_script.fountain"
    path.write_text(messy_screenplay, encoding="utf-8")
    return path
