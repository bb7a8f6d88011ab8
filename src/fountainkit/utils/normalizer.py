"""Clean-up of badly formatted screenplay imports.

Fixes mojibake left by a UTF-8/Windows-1252 round trip, normalises
whitespace and rejoins hard-wrapped lines, then adds the blank lines that
Fountain uses to separate elements.
"""

from __future__ import annotations

import re

from fountainkit.config import get_logger
from fountainkit.parser.fountain_models import ElementType
from fountainkit.parser.line_classifier import (
    SCENE_HEADING_PATTERN,
    classify_line,
    title_page_length,
)

logger = get_logger(__name__)

# UTF-8 punctuation decoded as Windows-1252, mapped to plain replacements
MOJIBAKE_SEQUENCES: dict[str, str] = {
    "â€™": "'",  # right single quote
    "â€˜": "'",  # left single quote
    "â€œ": '"',  # left double quote
    "â€\u009d": '"',  # right double quote
    "â€”": "\u2014",  # em dash
    "â€“": "\u2013",  # en dash
    "â€¦": "\u2026",  # ellipsis
}
REPLACEMENT_CHARACTER = "\ufffd"

_CUE_LIKE_PATTERN = re.compile(r"^[A-Z][A-Z\s.']+$")


def detect_encoding_issues(text: str) -> bool:
    """Return True if the text contains replacement characters or mojibake."""
    return REPLACEMENT_CHARACTER in text or any(
        sequence in text for sequence in MOJIBAKE_SEQUENCES
    )


def _guess_replacement(text: str, index: int) -> str:
    before = text[index - 1] if index > 0 else ""
    after = text[index + 1] if index + 1 < len(text) else ""
    if before.isalnum() and after.isalnum():
        return "'"
    if before.isspace() or after.isspace():
        return '"'
    return "'"


def fix_character_encoding(text: str) -> str:
    """Repair mojibake punctuation and guess what replacement characters were.

    A replacement character between two letters or digits becomes an
    apostrophe, one next to whitespace a double quote, anything else an
    apostrophe.
    """
    fixed = text
    for sequence, replacement in MOJIBAKE_SEQUENCES.items():
        fixed = fixed.replace(sequence, replacement)

    if REPLACEMENT_CHARACTER not in fixed:
        return fixed

    return "".join(
        _guess_replacement(fixed, index) if char == REPLACEMENT_CHARACTER else char
        for index, char in enumerate(fixed)
    )


def _is_wrapped(current: str, next_line: str) -> bool:
    """Return True if ``next_line`` continues ``current`` after a hard wrap."""
    if not next_line or re.search(r"[.!?:;]$", current):
        return False
    if next_line[0].isupper() or SCENE_HEADING_PATTERN.match(next_line):
        return False
    is_cue = bool(_CUE_LIKE_PATTERN.match(current)) and len(current.split()) <= 4
    is_parenthetical = next_line.startswith("(") and next_line.endswith(")")
    return not (is_cue and is_parenthetical)


def normalize_whitespace(text: str) -> str:
    """Normalise line endings and spaces, rejoining hard-wrapped lines.

    Blank lines are preserved. A line is joined to the previous one when the
    previous line has no closing punctuation and this one starts lowercase.
    Title page lines are left alone.
    """
    lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    title_lines = title_page_length(lines)
    normalized: list[str] = list(lines[:title_lines])
    pending: str | None = None

    for index in range(title_lines, len(lines)):
        trimmed = lines[index].strip()
        if not trimmed:
            if pending is not None:
                normalized.append(pending)
                pending = None
            normalized.append("")
            continue

        collapsed = re.sub(r"\s{2,}", " ", trimmed)
        joined = f"{pending} {collapsed}" if pending is not None else collapsed
        pending = None

        next_line = lines[index + 1].strip() if index + 1 < len(lines) else ""
        if _is_wrapped(collapsed, next_line):
            pending = joined
        else:
            normalized.append(joined)

    if pending is not None:
        normalized.append(pending)

    return "\n".join(normalized)


def enforce_fountain_spacing(text: str) -> str:
    """Insert the blank lines that separate Fountain elements.

    A blank line goes before every scene heading and character cue, and
    after a dialogue block that is followed by anything other than more
    dialogue. Runs of blank lines collapse to one; the result is trimmed.
    """
    lines = text.split("\n")
    title_lines = title_page_length(lines)
    output: list[str] = list(lines[:title_lines])
    previous_type: ElementType | None = (
        ElementType.TITLE_PAGE if title_lines else None
    )

    for line in lines[title_lines:]:
        if not line.strip():
            output.append("")
            previous_type = ElementType.EMPTY
            continue

        element_type = classify_line(line, previous_type)
        needs_blank = (
            element_type == ElementType.SCENE_HEADING
            and previous_type != ElementType.SCENE_HEADING
        ) or (
            element_type == ElementType.CHARACTER
            and previous_type not in (None, ElementType.EMPTY)
        ) or (
            previous_type in (ElementType.DIALOGUE, ElementType.PARENTHETICAL)
            and element_type
            not in (ElementType.DIALOGUE, ElementType.PARENTHETICAL)
        )
        if needs_blank and output and output[-1].strip():
            output.append("")

        output.append(line)
        previous_type = element_type

    return re.sub(r"\n{3,}", "\n\n", "\n".join(output)).strip()


def normalize_screenplay_text(content: str) -> str:
    """Run every normalisation step on imported screenplay text.

    Args:
        content: Raw imported text

    Returns:
        Normalised Fountain text; blank input is returned unchanged
    """
    if not content or not content.strip():
        return content

    had_encoding_issues = detect_encoding_issues(content)
    normalized = fix_character_encoding(content)
    normalized = normalize_whitespace(normalized)
    normalized = enforce_fountain_spacing(normalized)

    logger.debug(
        "Normalized screenplay text",
        original_length=len(content),
        normalized_length=len(normalized),
        encoding_issues=had_encoding_issues,
    )
    return normalized
