"""Automatic correction of Fountain formatting issues."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from fountainkit.config import FountainKitSettings, get_logger, get_settings
from fountainkit.parser.fountain_models import ElementType
from fountainkit.parser.line_classifier import (
    SCENE_PREFIX,
    classify_line,
    clean_character_name,
    iter_lines,
    title_page_length,
)
from fountainkit.utils.screenplay import ScreenplayUtils
from fountainkit.validators.format_validator import FormatIssue

logger = get_logger(__name__)

# [. \t] rather than \s so a match never runs onto the next line
LOWERCASE_HEADING_PATTERN = re.compile(
    rf"^({SCENE_PREFIX})[. \t]+([^\n]+)$", re.IGNORECASE | re.MULTILINE
)
HEADING_WITHOUT_TIME_PATTERN = re.compile(
    rf"^({SCENE_PREFIX})[. \t]+((?!-)(?:(?![ \t]-[ \t])[^\n])+)$", re.MULTILINE
)

_NO_BLANK_BEFORE_CHARACTER = (None, ElementType.EMPTY, ElementType.SCENE_HEADING)


@dataclass
class CorrectionResult:
    """Outcome of applying fixes to a document."""

    corrected_content: str
    applied_fixes: list[FormatIssue] = field(default_factory=list)
    change_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        return {
            "corrected_content": self.corrected_content,
            "change_count": self.change_count,
            "applied_fixes": [issue.to_dict() for issue in self.applied_fixes],
        }


class FormatCorrector:
    """Apply validator fixes and normalise Fountain spacing."""

    def __init__(self, settings: FountainKitSettings | None = None) -> None:
        """Initialize the corrector.

        Args:
            settings: Settings to use, defaults to the global settings
        """
        self.settings = settings or get_settings()

    def correct(self, document: str, issues: list[FormatIssue]) -> CorrectionResult:
        """Apply suggested fixes, then enforce blank lines around cues.

        Fixes are applied bottom-up so that a fix expanding one line into
        several never shifts the line numbers of fixes still to apply. Each
        line receives at most one fix; when several issues target the same
        line, the first one reported wins.

        Args:
            document: Raw Fountain text
            issues: Issues reported for ``document``

        Returns:
            Corrected text and the issues whose fixes were applied
        """
        lines = document.split("\n")
        fixable = [issue for issue in issues if issue.suggested_fix is not None]
        ordered = sorted(fixable, key=lambda issue: issue.line_number, reverse=True)

        applied: list[FormatIssue] = []
        fixed_lines: set[int] = set()
        for issue in ordered:
            fix = issue.suggested_fix
            index = issue.line_number - 1
            if fix is None or index in fixed_lines or not 0 <= index < len(lines):
                continue
            lines[index : index + 1] = list(fix.lines)
            fixed_lines.add(index)
            applied.append(issue)

        corrected = self._apply_intelligent_corrections(lines)

        logger.info(
            "Corrected fountain document",
            applied=len(applied),
            skipped=len(fixable) - len(applied),
        )
        return CorrectionResult(
            corrected_content="\n".join(corrected),
            applied_fixes=applied,
            change_count=len(applied),
        )

    def _apply_intelligent_corrections(self, lines: list[str]) -> list[str]:
        """Insert the blank lines Fountain needs around headings and cues.

        The type of each line is classified against the last line emitted,
        inserted blanks included, so the output classifies exactly as it was
        corrected.
        """
        title_lines = title_page_length(lines)
        corrected: list[str] = list(lines[:title_lines])
        previous_type: ElementType | None = (
            ElementType.TITLE_PAGE if title_lines else None
        )

        for index in range(title_lines, len(lines)):
            line = lines[index]
            trimmed = line.strip()
            element_type = classify_line(line, previous_type)

            if not trimmed:
                corrected.append(line)
                previous_type = element_type
                continue

            if element_type == ElementType.SCENE_HEADING:
                corrected.append(trimmed)
                previous_type = element_type
                next_line = lines[index + 1] if index + 1 < len(lines) else None
                if (
                    next_line is not None
                    and next_line.strip()
                    and classify_line(next_line, element_type)
                    != ElementType.SCENE_HEADING
                ):
                    corrected.append("")
                    previous_type = ElementType.EMPTY
                continue

            if element_type == ElementType.CHARACTER:
                if previous_type not in _NO_BLANK_BEFORE_CHARACTER:
                    corrected.append("")
                corrected.append(trimmed)
            else:
                corrected.append(line)
            previous_type = element_type

        return corrected

    def quick_correct(self, text: str) -> str:
        """Uppercase scene headings and add a missing time of day.

        A cheap regex pass that does not run the validator.
        """
        default_time = self.settings.default_time_of_day
        heading_type = ScreenplayUtils.format_scene_heading_type

        corrected = LOWERCASE_HEADING_PATTERN.sub(
            lambda m: f"{heading_type(m.group(1))} {m.group(2).upper()}", text
        )
        return HEADING_WITHOUT_TIME_PATTERN.sub(
            lambda m: f"{heading_type(m.group(1))} {m.group(2).strip()} - "
            f"{default_time}",
            corrected,
        )

    def normalize_character_names(self, text: str) -> str:
        """Uppercase mixed-case lines that spell a known character name."""
        names = {
            clean_character_name(line.text).upper()
            for line in iter_lines(text)
            if line.element_type == ElementType.CHARACTER
        }

        normalized: list[str] = []
        for line in text.split("\n"):
            trimmed = line.strip()
            upper = trimmed.upper()
            if 2 < len(trimmed) < 40 and upper in names and trimmed != upper:
                normalized.append(upper)
            else:
                normalized.append(line)
        return "\n".join(normalized)

    def ensure_proper_spacing(self, text: str) -> str:
        """Collapse blank runs and put single blank lines around headings and cues.

        Non-blank lines outside the title page are trimmed; leading blank
        lines are dropped.
        """
        lines = text.split("\n")
        title_lines = title_page_length(lines)
        spaced: list[str] = list(lines[:title_lines])
        previous_type: ElementType | None = (
            ElementType.TITLE_PAGE if title_lines else None
        )

        for index in range(title_lines, len(lines)):
            trimmed = lines[index].strip()
            if not trimmed:
                if spaced and spaced[-1] != "":
                    spaced.append("")
                previous_type = ElementType.EMPTY
                continue

            element_type = classify_line(trimmed, previous_type)
            if (
                element_type == ElementType.CHARACTER
                and previous_type not in _NO_BLANK_BEFORE_CHARACTER
            ):
                spaced.append("")
            spaced.append(trimmed)
            previous_type = element_type

            if element_type == ElementType.SCENE_HEADING:
                next_line = lines[index + 1] if index + 1 < len(lines) else ""
                if next_line.strip():
                    spaced.append("")
                    previous_type = ElementType.EMPTY

        return "\n".join(spaced)

    def smart_format(self, text: str) -> str:
        """Quick-correct headings, normalise names, then fix spacing."""
        formatted = self.quick_correct(text)
        formatted = self.normalize_character_names(formatted)
        return self.ensure_proper_spacing(formatted)
