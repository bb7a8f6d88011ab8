"""Custom exception hierarchy for fountainkit with helpful error messages.

The screenplay passes themselves (parse, extract, validate, correct) never
raise for string input. These exceptions cover configuration loading and
the command line surface.
"""

from __future__ import annotations

from typing import Any


class FountainKitError(Exception):
    """Base exception with helpful formatting for all fountainkit errors.

    Provides structured error messages with hints and details to help users
    understand and fix problems.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize exception with structured error information.

        Args:
            message: Primary error message describing what went wrong
            hint: Optional hint suggesting how to fix the problem
            details: Optional dictionary with additional debugging information
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        """Format the error message with hint and details.

        Returns:
            Formatted error string with all available information
        """
        output = f"Error: {self.message}"
        if self.hint:
            output += f"\nHint: {self.hint}"
        if self.details:
            details_str = "\n".join(
                f"  {key}: {value}" for key, value in self.details.items()
            )
            output += f"\nDetails:\n{details_str}"
        return output


class ConfigurationError(FountainKitError):
    """Configuration errors including invalid settings and missing config files."""

    pass


class FountainFileNotFoundError(FountainKitError):
    """Screenplay file not found, with helpful path information."""

    def __init__(self, path: Any) -> None:
        """Initialize with the missing path.

        Args:
            path: Path that could not be read
        """
        self.path = path
        super().__init__(
            message=f"Screenplay file not found: {path}",
            hint="Check the path, or pipe the screenplay text through stdin",
            details={"path": str(path)},
        )


class ValidationError(FountainKitError):
    """Input validation errors with details about what was expected."""

    pass


def check_config_keys(config: dict[str, Any]) -> None:
    """Check for common configuration mistakes.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigurationError: With hints about correct configuration keys
    """
    wrong_keys = {
        "level": "log_level",
        "format": "log_format",
        "time_of_day": "default_time_of_day",
        "max_words": "import_character_max_words",
        "min_name_length": "dedup_min_name_length",
    }

    for wrong, correct in wrong_keys.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config.keys()),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )
