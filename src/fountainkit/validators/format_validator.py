"""Fountain format validation with suggested fixes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from fountainkit.config import FountainKitSettings, get_logger, get_settings
from fountainkit.parser.fountain_models import ElementType
from fountainkit.parser.line_classifier import SCENE_PREFIX, LineContext, walk_lines
from fountainkit.utils.screenplay import ScreenplayUtils

logger = get_logger(__name__)


class IssueSeverity(str, Enum):
    """How serious a format issue is."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class IssueType(str, Enum):
    """Area of the Fountain format an issue concerns."""

    CHARACTER = "character"
    SCENE_HEADING = "scene_heading"
    DIALOGUE = "dialogue"
    SPACING = "spacing"
    GENERAL = "general"


@dataclass(frozen=True)
class SingleLineFix:
    """Replace one line with another."""

    text: str

    @property
    def lines(self) -> tuple[str, ...]:
        return (self.text,)


@dataclass(frozen=True)
class MultiLineFix:
    """Replace one line with several lines."""

    lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


Fix = SingleLineFix | MultiLineFix


def make_fix(text: str) -> Fix:
    """Build a fix from newline-joined replacement text."""
    lines = text.split("\n")
    if len(lines) == 1:
        return SingleLineFix(text)
    return MultiLineFix(tuple(lines))


@dataclass(frozen=True)
class FormatIssue:
    """A formatting problem found on one line (``line_number`` is 1-based)."""

    line_number: int
    severity: IssueSeverity
    type: IssueType
    description: str
    original_text: str
    suggested_fix: Fix | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "line_number": self.line_number,
            "severity": self.severity.value,
            "type": self.type.value,
            "description": self.description,
            "original_text": self.original_text,
            "suggested_fix": self.suggested_fix.text if self.suggested_fix else None,
        }


@dataclass
class ValidationResult:
    """Result of validating a whole document."""

    is_valid: bool
    issues: list[FormatIssue] = field(default_factory=list)
    has_auto_fixable_issues: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "is_valid": self.is_valid,
            "has_auto_fixable_issues": self.has_auto_fixable_issues,
            "issues": [issue.to_dict() for issue in self.issues],
            "summary": get_issue_summary(self.issues),
        }


def get_issue_summary(issues: list[FormatIssue]) -> dict[str, int]:
    """Count issues per issue type, every type included."""
    summary = {issue_type.value: 0 for issue_type in IssueType}
    for issue in issues:
        summary[issue.type.value] += 1
    return summary


class FormatValidator:
    """Detect common Fountain formatting mistakes.

    Each non-blank line produces at most one content issue; the first
    matching check wins. Spacing around scene headings and character cues
    is checked independently.
    """

    COLON_DIALOGUE: ClassVar[re.Pattern[str]] = re.compile(
        r"^([A-Za-z][A-Za-z\s']+):\s*(.+)$"
    )
    DASH_DIALOGUE: ClassVar[re.Pattern[str]] = re.compile(
        r"^([A-Z][A-Z\s']+)\s*-\s*(.+)$"
    )
    MIXED_CASE_NAME: ClassVar[re.Pattern[str]] = re.compile(
        r"^([A-Z][a-z]+(?:\s+[A-Z][a-z]+)*)$"
    )
    LOOSE_HEADING: ClassVar[re.Pattern[str]] = re.compile(
        rf"^({SCENE_PREFIX})[.\s]+(.+?)(?:\s+-\s+(.+))?$", re.IGNORECASE
    )
    HEADING_WITHOUT_TIME: ClassVar[re.Pattern[str]] = re.compile(
        rf"^({SCENE_PREFIX})[.\s]+((?!-)(?:(?!\s-\s).)+)$"
    )
    BARE_LOCATION: ClassVar[re.Pattern[str]] = re.compile(r"^[A-Z][A-Za-z\s']+$")
    QUOTED_DIALOGUE: ClassVar[re.Pattern[str]] = re.compile(
        r"^[\"'](.+)[\"']\s*(?:said|says)\s+([A-Za-z]+)$", re.IGNORECASE
    )

    def __init__(self, settings: FountainKitSettings | None = None) -> None:
        """Initialize the validator.

        Args:
            settings: Settings to use, defaults to the global settings
        """
        self.settings = settings or get_settings()

    def validate(self, document: str) -> ValidationResult:
        """Validate a document.

        Title page lines and blank lines are never reported.

        Args:
            document: Raw Fountain text

        Returns:
            Validation result with every detected issue, in line order
        """
        issues: list[FormatIssue] = []

        def visit(line: LineContext) -> None:
            if line.element_type in (ElementType.EMPTY, ElementType.TITLE_PAGE):
                return
            content_issue = self._check_content(line)
            if content_issue:
                issues.append(content_issue)
            spacing_issue = self._check_spacing(line)
            if spacing_issue:
                issues.append(spacing_issue)

        walk_lines(document, visit)

        has_fixes = any(issue.suggested_fix is not None for issue in issues)
        logger.debug(
            "Validated fountain document",
            issues=len(issues),
            auto_fixable=has_fixes,
        )
        return ValidationResult(
            is_valid=not issues,
            issues=issues,
            has_auto_fixable_issues=has_fixes,
        )

    def _issue(
        self,
        line: LineContext,
        severity: IssueSeverity,
        issue_type: IssueType,
        description: str,
        fix: str,
    ) -> FormatIssue:
        return FormatIssue(
            line_number=line.line_number,
            severity=severity,
            type=issue_type,
            description=description,
            original_text=line.trimmed,
            suggested_fix=make_fix(fix),
        )

    def _check_content(self, line: LineContext) -> FormatIssue | None:
        """Run the content checks in priority order."""
        text = line.trimmed
        is_heading = line.element_type == ElementType.SCENE_HEADING
        default_time = self.settings.default_time_of_day
        heading_type = ScreenplayUtils.format_scene_heading_type

        if not is_heading:
            if match := self.COLON_DIALOGUE.match(text):
                name = match.group(1).strip()
                return self._issue(
                    line,
                    IssueSeverity.WARNING,
                    IssueType.CHARACTER,
                    f'Character name "{name}" uses colon format. '
                    "Should be on separate line in ALL CAPS.",
                    f"{name.upper()}\n{match.group(2).strip()}",
                )

            match = self.DASH_DIALOGUE.match(text)
            if match and len(text) < 50:
                name = match.group(1).strip()
                return self._issue(
                    line,
                    IssueSeverity.WARNING,
                    IssueType.DIALOGUE,
                    f'Character "{name}" uses dash separator. '
                    "Dialogue should be on next line.",
                    f"{name}\n{match.group(2).strip()}",
                )

            if (
                line.previous_type == ElementType.EMPTY
                and len(text) < 30
                and self.MIXED_CASE_NAME.match(text)
            ):
                return self._issue(
                    line,
                    IssueSeverity.WARNING,
                    IssueType.CHARACTER,
                    f'Potential character name "{text}" not in ALL CAPS.',
                    text.upper(),
                )

        match = self.LOOSE_HEADING.match(text)
        if match and not match.group(1).isupper():
            prefix, location, time = match.groups()
            time = time or default_time
            return self._issue(
                line,
                IssueSeverity.WARNING,
                IssueType.SCENE_HEADING,
                "Scene heading not in proper format (should be uppercase).",
                f"{heading_type(prefix)} {location.upper()} - {time.upper()}",
            )

        match = self.HEADING_WITHOUT_TIME.match(text)
        if match and len(text) > 5:
            return self._issue(
                line,
                IssueSeverity.INFO,
                IssueType.SCENE_HEADING,
                "Scene heading missing time of day.",
                f"{heading_type(match.group(1))} {match.group(2).strip()} - "
                f"{default_time}",
            )

        if (
            line.element_type == ElementType.ACTION
            and 5 < len(text) < 40
            and self.BARE_LOCATION.match(text)
        ):
            return self._issue(
                line,
                IssueSeverity.INFO,
                IssueType.SCENE_HEADING,
                f'"{text}" looks like a location but missing scene heading format.',
                f"INT. {text.upper()} - {default_time}",
            )

        if match := self.QUOTED_DIALOGUE.match(text):
            return self._issue(
                line,
                IssueSeverity.WARNING,
                IssueType.DIALOGUE,
                "Quoted dialogue format detected. "
                "Should use Fountain character/dialogue format.",
                f"{match.group(2).upper()}\n{match.group(1)}",
            )

        return None

    def _check_spacing(self, line: LineContext) -> FormatIssue | None:
        """Report a missing blank line, attached to the line above."""
        if line.index == 0:
            return None

        previous_text = line.lines[line.index - 1]
        if line.element_type == ElementType.CHARACTER and line.previous_type not in (
            None,
            ElementType.EMPTY,
        ):
            description = "Character name should be preceded by blank line."
        elif (
            line.previous_type == ElementType.SCENE_HEADING
            and line.element_type != ElementType.SCENE_HEADING
        ):
            description = "Scene heading should be followed by blank line."
        else:
            return None

        return FormatIssue(
            line_number=line.line_number - 1,
            severity=IssueSeverity.INFO,
            type=IssueType.SPACING,
            description=description,
            original_text=previous_text,
            suggested_fix=MultiLineFix((previous_text, "")),
        )
