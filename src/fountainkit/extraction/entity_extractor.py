"""Conservative extraction of scenes, locations and characters.

Extraction is stricter than live classification: anything that looks like
an entity but fails a structural rule is reported as a questionable item
for human review instead of being imported.
"""

from __future__ import annotations

import re

from fountainkit.config import FountainKitSettings, get_logger, get_settings
from fountainkit.extraction.models import (
    AutoImportResult,
    ExtractedScene,
    LocationType,
    QuestionableItem,
    QuestionableKind,
)
from fountainkit.extraction.name_deduplicator import NameDeduplicator
from fountainkit.parser.fountain_models import ElementType
from fountainkit.parser.line_classifier import (
    SCENE_PREFIX,
    LineContext,
    clean_character_name,
    expand_scene_heading,
    is_fountain_tag,
    walk_lines,
)

logger = get_logger(__name__)

# PREFIX SEPARATOR LOCATION - TIME; the last spaced dash separates the time
STRICT_HEADING_PATTERN = re.compile(
    rf"^({SCENE_PREFIX})[.\s]+(.*)\s+-\s+(.+)$", re.IGNORECASE
)
AUTO_IMPORT_PATTERN = re.compile(rf"^{SCENE_PREFIX}[.\s]", re.IGNORECASE | re.MULTILINE)

TIME_SUFFIX_PATTERN = re.compile(
    r"\s*-\s*(?:DAY|NIGHT|MORNING|AFTERNOON|EVENING|DAWN|DUSK|CONTINUOUS|LATER|"
    r"SAME TIME)$",
    re.IGNORECASE,
)
STRUCTURAL_WORD_PATTERN = re.compile(
    r"^(?:ACT|SCENE|CHAPTER|PART|TITLE|INTERLUDE|MONTAGE|SERIES OF SHOTS)\b",
    re.IGNORECASE,
)
COLON_SHORTHAND_PATTERN = re.compile(r"^([A-Za-z][A-Za-z\s']+?):\s*(.+)$")
TITLE_CASE_NAME_PATTERN = re.compile(r"^[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*$")


def should_auto_import(text: str) -> bool:
    """Return True if the text contains at least one scene heading line."""
    return AUTO_IMPORT_PATTERN.search(text) is not None


def format_location_name(location: str) -> str:
    """Strip a time-of-day suffix and uppercase a location name."""
    return TIME_SUFFIX_PATTERN.sub("", location).strip().upper()


def format_character_name(name: str) -> str:
    """Title-case a character name for display."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in name.split(" "))


class _ExtractionPass:
    """Per-document state for one extraction run."""

    def __init__(self, settings: FountainKitSettings) -> None:
        self.settings = settings
        self.result = AutoImportResult()
        self.current_scene: ExtractedScene | None = None
        self.description_target: str | None = None

    def visit(self, line: LineContext) -> None:
        trimmed = line.trimmed

        if trimmed.startswith("@") and not is_fountain_tag(trimmed):
            self._start_description(trimmed[1:].strip().upper())
            return

        if self.description_target is not None:
            if (
                not trimmed
                or trimmed.startswith("=")
                or is_fountain_tag(trimmed)
                or line.element_type == ElementType.SCENE_HEADING
            ):
                self.description_target = None
            else:
                self._append_description(trimmed)
                return

        if line.element_type == ElementType.SCENE_HEADING:
            self._handle_heading(line)
        elif self.current_scene is not None:
            self._handle_scene_line(line)

    def finish(self, line_count: int) -> AutoImportResult:
        if self.current_scene is not None:
            self.current_scene.end_line = line_count - 1
            self.result.scenes.append(self.current_scene)
            self.current_scene = None
        return self.result

    def _close_scene(self, index: int) -> None:
        if self.current_scene is not None:
            self.current_scene.end_line = index - 1
            self.result.scenes.append(self.current_scene)
            self.current_scene = None

    def _question(
        self,
        kind: QuestionableKind,
        line: LineContext,
        reason: str,
        suggestion: str | None = None,
    ) -> None:
        self.result.questionable_items.append(
            QuestionableItem(
                type=kind,
                text=line.trimmed,
                line_number=line.line_number,
                reason=reason,
                suggestion=suggestion,
            )
        )

    def _start_description(self, name: str) -> None:
        if not name or len(name) >= 40:
            return
        self.description_target = name
        if name not in self.result.characters:
            self.result.characters.append(name)
        self.result.character_descriptions.setdefault(name, "")

    def _append_description(self, text: str) -> None:
        name = self.description_target
        if name is None:
            return
        existing = self.result.character_descriptions.get(name, "")
        self.result.character_descriptions[name] = (
            f"{existing} {text}" if existing else text
        )

    def _handle_heading(self, line: LineContext) -> None:
        trimmed = line.trimmed
        self._close_scene(line.index)

        match = STRICT_HEADING_PATTERN.match(trimmed)
        if not match:
            heading = expand_scene_heading(trimmed)
            self._question(
                QuestionableKind.SCENE_HEADING,
                line,
                "Scene heading is missing a time of day",
                f"{heading} - {self.settings.default_time_of_day}",
            )
            return

        location = format_location_name(match.group(2))
        if not location:
            self._question(
                QuestionableKind.LOCATION,
                line,
                "Scene heading has no location",
            )
            return

        location_type = LocationType.from_prefix(match.group(1))
        if location not in self.result.location_types:
            self.result.locations.append(location)
            self.result.location_types[location] = location_type

        self.current_scene = ExtractedScene(
            heading=trimmed,
            location=location,
            location_type=location_type,
            start_line=line.index,
            end_line=line.index,
        )

    def _handle_scene_line(self, line: LineContext) -> None:
        trimmed = line.trimmed
        if not trimmed:
            return

        if line.element_type == ElementType.CHARACTER:
            if STRUCTURAL_WORD_PATTERN.match(trimmed):
                return
            name = clean_character_name(trimmed)
            if len(name.split()) > self.settings.import_character_max_words:
                self._question(
                    QuestionableKind.CHARACTER,
                    line,
                    "Too many words for a character name",
                )
                return
            if name:
                self._add_character(name)
            return

        colon = COLON_SHORTHAND_PATTERN.match(trimmed)
        if colon:
            name = colon.group(1).strip()
            if len(name) < 30:
                self._question(
                    QuestionableKind.CHARACTER,
                    line,
                    "Character and dialogue written on one line",
                    name.upper(),
                )
            return

        next_line = line.next_line
        if (
            line.previous_type == ElementType.EMPTY
            and len(trimmed) < 30
            and TITLE_CASE_NAME_PATTERN.match(trimmed)
            and next_line is not None
            and next_line.strip()
        ):
            self._question(
                QuestionableKind.CHARACTER,
                line,
                "Character name is not uppercase",
                trimmed.upper(),
            )

    def _add_character(self, name: str) -> None:
        if name not in self.result.characters:
            self.result.characters.append(name)
        scene = self.current_scene
        if scene is not None and name not in scene.characters:
            scene.characters.append(name)


class EntityExtractor:
    """Extract scenes, locations and characters from Fountain text."""

    def __init__(self, settings: FountainKitSettings | None = None) -> None:
        """Initialize the extractor.

        Args:
            settings: Settings to use, defaults to the global settings
        """
        self.settings = settings or get_settings()
        self.deduplicator = NameDeduplicator(self.settings)

    def extract(self, document: str) -> AutoImportResult:
        """Run a full extraction pass over a document.

        Args:
            document: Raw Fountain text

        Returns:
            Extracted entities with canonical character names, plus the
            questionable lines that need human confirmation
        """
        extraction = _ExtractionPass(self.settings)
        line_count = walk_lines(document, extraction.visit)
        result = self.deduplicator.deduplicate(extraction.finish(line_count))

        logger.info(
            "Extracted screenplay entities",
            scenes=len(result.scenes),
            locations=len(result.locations),
            characters=len(result.characters),
            questionable=len(result.questionable_items),
        )
        return result
