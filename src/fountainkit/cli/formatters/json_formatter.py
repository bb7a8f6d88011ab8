"""JSON output formatter for CLI."""

from __future__ import annotations

import dataclasses
import json
from typing import Any

from fountainkit.cli.formatters.base import OutputFormat, OutputFormatter


def _to_jsonable(data: Any) -> Any:
    """Convert result objects into plain JSON-compatible structures."""
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if hasattr(data, "model_dump"):
        return data.model_dump(mode="json")
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    if isinstance(data, dict):
        return {key: _to_jsonable(value) for key, value in data.items()}
    if isinstance(data, list | tuple):
        return [_to_jsonable(item) for item in data]
    return data


class JsonFormatter(OutputFormatter[Any]):
    """Generic JSON formatter for CLI output."""

    def format(
        self,
        data: Any,
        format_type: OutputFormat = OutputFormat.JSON,  # noqa: ARG002
    ) -> str:
        """Format data as JSON.

        Args:
            data: Data to format
            format_type: Output format type (ignored, always JSON)

        Returns:
            JSON string
        """
        converted = _to_jsonable(data)
        if isinstance(converted, dict | list):
            return json.dumps(converted, default=str, indent=2)
        # Primitives or unknown types
        return json.dumps({"value": converted}, default=str, indent=2)

    def format_success(self, message: str, data: Any = None) -> str:
        """Format a success response.

        Args:
            message: Success message
            data: Optional additional data

        Returns:
            JSON string
        """
        response: dict[str, Any] = {"success": True, "message": message}
        if data is not None:
            response["data"] = _to_jsonable(data)
        return json.dumps(response, default=str, indent=2)

    def format_error_response(self, error: str | Exception, code: int = 1) -> str:
        """Format an error response.

        Args:
            error: Error message or exception
            code: Error code

        Returns:
            JSON string
        """
        error_msg = str(error) if isinstance(error, Exception) else error
        hint = getattr(error, "hint", None)

        response: dict[str, Any] = {"success": False, "error": error_msg, "code": code}
        if hint:
            response["hint"] = hint
        return json.dumps(response, indent=2)
