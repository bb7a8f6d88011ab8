"""Fountain format validation for fountainkit."""

from __future__ import annotations

from .format_validator import (
    Fix,
    FormatIssue,
    FormatValidator,
    IssueSeverity,
    IssueType,
    MultiLineFix,
    SingleLineFix,
    ValidationResult,
    get_issue_summary,
    make_fix,
)

__all__ = [
    "Fix",
    "FormatIssue",
    "FormatValidator",
    "IssueSeverity",
    "IssueType",
    "MultiLineFix",
    "SingleLineFix",
    "ValidationResult",
    "get_issue_summary",
    "make_fix",
]
