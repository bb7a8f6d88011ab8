"""Screenplay-specific utility functions."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import ClassVar, NamedTuple

from fountainkit.extraction.models import LocationType
from fountainkit.parser.line_classifier import (
    SCENE_HEADING_PATTERN,
    SCENE_PREFIX,
    is_fountain_tag,
)


class SceneHeadingParts(NamedTuple):
    """Components of a scene heading line."""

    type: str
    location: str | None
    time: str | None
    full_text: str


class CharacterCount(NamedTuple):
    """Character totals for a document."""

    with_spaces: int
    without_spaces: int


@dataclass
class SceneTags:
    """Relationship tags found in one scene (lines are 1-based)."""

    scene_heading: str
    start_line: int
    end_line: int
    location: str | None = None
    characters: list[str] = field(default_factory=list)


class ScreenplayUtils:
    """Utility functions for screenplay processing."""

    PREFIX_PATTERN = re.compile(rf"^({SCENE_PREFIX})(?:[.\s]+|$)", re.IGNORECASE)

    # Canonical spelling of each heading prefix, keyed without periods
    HEADING_TYPES: ClassVar[dict[str, str]] = {
        "INT": "INT.",
        "EXT": "EXT.",
        "EST": "EST.",
        "INT/EXT": "INT./EXT.",
        "I/E": "I./E.",
    }

    TIME_INDICATORS: ClassVar[list[str]] = [
        "DAY",
        "NIGHT",
        "MORNING",
        "AFTERNOON",
        "EVENING",
        "DAWN",
        "DUSK",
        "CONTINUOUS",
        "LATER",
        "MOMENTS LATER",
        "SAME TIME",
        "SUNSET",
        "SUNRISE",
        "NOON",
    ]

    LOCATION_TAG_PATTERN = re.compile(r"@location:\s*([a-f0-9-]+)", re.IGNORECASE)
    CHARACTERS_TAG_PATTERN = re.compile(
        r"@characters:\s*([a-f0-9-,\s]+)", re.IGNORECASE
    )
    CHARACTER_TAG_PATTERN = re.compile(r"@character:\s*([a-f0-9-]+)", re.IGNORECASE)
    ANY_TAG_PATTERN = re.compile(r"@(?:location|characters?|scene):")

    @staticmethod
    def _split_prefix(heading: str) -> tuple[str, str]:
        """Split a heading into its raw prefix and the remaining text."""
        match = ScreenplayUtils.PREFIX_PATTERN.match(heading.strip())
        if not match:
            return "", heading.strip()
        return match.group(1), heading.strip()[match.end() :].strip()

    @staticmethod
    def extract_location(heading: str) -> str | None:
        """Extract location from scene heading.

        Args:
            heading: Scene heading text (e.g., "INT. COFFEE SHOP - DAY")

        Returns:
            Extracted location or None
        """
        if not heading:
            return None

        _, rest = ScreenplayUtils._split_prefix(heading)

        # Everything before the last " - " is the location
        if " - " in rest:
            location, _ = rest.rsplit(" - ", 1)
            location = location.strip()
            return location if location else None

        # Time only, no location
        if rest.startswith("- "):
            return None

        return rest if rest else None

    @staticmethod
    def extract_time(heading: str) -> str | None:
        """Extract time of day from scene heading.

        Args:
            heading: Scene heading text (e.g., "INT. COFFEE SHOP - DAY")

        Returns:
            Extracted time or None
        """
        if not heading:
            return None

        last_part = heading.upper().rsplit(" - ", 1)[-1]
        if re.search(r"\bMIDNIGHT\b", last_part):
            return "NIGHT"

        # Longest indicators first so MOMENTS LATER wins over LATER
        for indicator in sorted(ScreenplayUtils.TIME_INDICATORS, key=len, reverse=True):
            if re.search(rf"\b{re.escape(indicator)}\b", last_part):
                return indicator

        return None

    @staticmethod
    def format_scene_heading_type(type_text: str) -> str:
        """Canonical spelling of a heading prefix (``int/ext`` -> ``INT./EXT.``)."""
        key = type_text.strip().upper().replace(".", "")
        return ScreenplayUtils.HEADING_TYPES.get(key, type_text.strip().upper())

    @staticmethod
    def location_type(heading: str) -> LocationType | None:
        """Interior/exterior type of a heading, None when it has no prefix."""
        prefix, _ = ScreenplayUtils._split_prefix(heading or "")
        if not prefix:
            return None
        return LocationType.from_prefix(prefix)

    @staticmethod
    def parse_scene_heading(heading: str) -> SceneHeadingParts:
        """Parse a scene heading into its components.

        Args:
            heading: Scene heading text (e.g., "INT. COFFEE SHOP - DAY")

        Returns:
            SceneHeadingParts with the canonical type, the location, the raw
            time text after the last dash and the original heading
        """
        if not heading:
            return SceneHeadingParts("", None, None, "")

        prefix, rest = ScreenplayUtils._split_prefix(heading)
        scene_type = ScreenplayUtils.format_scene_heading_type(prefix) if prefix else ""

        time_of_day = None
        if " - " in rest:
            time_of_day = rest.rsplit(" - ", 1)[1].strip() or None

        return SceneHeadingParts(
            type=scene_type,
            location=ScreenplayUtils.extract_location(heading),
            time=time_of_day,
            full_text=heading.strip(),
        )

    @staticmethod
    def build_scene_heading(parts: SceneHeadingParts) -> str:
        """Assemble a heading line from its parts."""
        pieces = [ScreenplayUtils.format_scene_heading_type(parts.type)]
        if parts.location:
            pieces.append(parts.location)
        heading = " ".join(piece for piece in pieces if piece)
        if parts.time:
            heading = f"{heading} - {parts.time}"
        return heading

    @staticmethod
    def estimate_page_count(text: str, lines_per_page: int = 55) -> int:
        """Approximate page count, one page per ``lines_per_page`` lines."""
        return math.ceil(len(text.split("\n")) / lines_per_page)

    @staticmethod
    def count_words(text: str) -> int:
        """Count whitespace-separated words."""
        return len(text.split())

    @staticmethod
    def character_count(text: str) -> CharacterCount:
        """Count characters with and without whitespace."""
        return CharacterCount(
            with_spaces=len(text),
            without_spaces=len(re.sub(r"\s", "", text)),
        )

    @staticmethod
    def is_fountain_tag(line: str) -> bool:
        """Return True for an ``@location:``/``@character(s):``/``@scene:`` line."""
        return is_fountain_tag(line)

    @staticmethod
    def strip_tags_for_display(content: str) -> str:
        """Drop tag lines so the editor shows clean screenplay text."""
        return "\n".join(
            line for line in content.split("\n") if not is_fountain_tag(line)
        )

    @staticmethod
    def visible_line_number(content: str, position: int) -> int:
        """Line number at ``position`` counting only non-tag lines."""
        lines = content[: max(position, 0)].split("\n")
        return sum(1 for line in lines if not is_fountain_tag(line))

    @staticmethod
    def remove_tags(content: str) -> str:
        """Remove every line that carries a relationship tag."""
        return "\n".join(
            line
            for line in content.split("\n")
            if not ScreenplayUtils.ANY_TAG_PATTERN.search(line)
        )

    @staticmethod
    def extract_tags(content: str) -> list[SceneTags]:
        """Collect ``@location``/``@character(s)`` tag ids per scene.

        Args:
            content: Fountain text with tag lines

        Returns:
            One SceneTags per scene heading, in document order
        """
        scenes: list[SceneTags] = []
        current: SceneTags | None = None
        lines = content.split("\n")

        for line_number, line in enumerate(lines, start=1):
            if SCENE_HEADING_PATTERN.match(line):
                if current is not None:
                    current.end_line = line_number - 1
                    scenes.append(current)
                current = SceneTags(
                    scene_heading=line.strip(),
                    start_line=line_number,
                    end_line=line_number,
                )

            if current is None:
                continue

            if match := ScreenplayUtils.LOCATION_TAG_PATTERN.search(line):
                current.location = match.group(1)

            if match := ScreenplayUtils.CHARACTERS_TAG_PATTERN.search(line):
                current.characters = [
                    char_id.strip()
                    for char_id in match.group(1).split(",")
                    if char_id.strip()
                ]

            if match := ScreenplayUtils.CHARACTER_TAG_PATTERN.search(line):
                if match.group(1) not in current.characters:
                    current.characters.append(match.group(1))

        if current is not None:
            current.end_line = len(lines)
            scenes.append(current)

        return scenes
