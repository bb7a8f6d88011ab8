"""Fountain document parser and cursor-scoped scene queries."""

from __future__ import annotations

from pathlib import Path

from fountainkit.config import FountainKitSettings, get_logger, get_settings
from fountainkit.exceptions import FountainFileNotFoundError
from fountainkit.parser.fountain_models import (
    ActEstimate,
    ElementType,
    FountainElement,
    SceneContext,
)
from fountainkit.parser.line_classifier import (
    classify_line,
    clean_character_name,
    is_fountain_tag,
    is_valid_scene_heading,
    iter_lines,
)

logger = get_logger(__name__)


class FountainParser:
    """Turn Fountain text into a typed element stream.

    Parsing never raises: any line that matches no rule becomes action.
    """

    def __init__(self, settings: FountainKitSettings | None = None) -> None:
        """Initialize the parser.

        Args:
            settings: Settings to use, defaults to the global settings
        """
        self.settings = settings or get_settings()

    def parse(self, document: str) -> list[FountainElement]:
        """Classify every line of a document.

        Args:
            document: Raw Fountain text

        Returns:
            One element per physical line, in document order
        """
        elements = [
            FountainElement(
                type=context.element_type,
                text=context.text,
                line_number=context.line_number,
            )
            for context in iter_lines(document)
        ]
        logger.debug("Parsed fountain document", elements=len(elements))
        return elements

    def parse_file(self, file_path: Path) -> list[FountainElement]:
        """Parse a Fountain file.

        Args:
            file_path: Path to the Fountain file

        Returns:
            Parsed elements

        Raises:
            FountainFileNotFoundError: If the file does not exist
        """
        if not file_path.is_file():
            raise FountainFileNotFoundError(file_path)
        logger.debug(f"Parsing fountain file: {file_path}")
        return self.parse(file_path.read_text(encoding="utf-8"))

    @staticmethod
    def export_to_fountain(elements: list[FountainElement]) -> str:
        """Serialize elements back to Fountain text.

        Parsing the result yields the same sequence of element types.
        """
        return "\n".join(element.text for element in elements)

    @staticmethod
    def _lines_before_cursor(document: str, cursor: int) -> list[str]:
        """Lines up to the cursor, the partial cursor line included."""
        return document[: max(cursor, 0)].split("\n")

    @staticmethod
    def _find_scene_start(lines: list[str]) -> int | None:
        """Index of the last scene heading in ``lines``, None if there is none."""
        for index in range(len(lines) - 1, -1, -1):
            if is_valid_scene_heading(lines[index]):
                return index
        return None

    def get_current_scene_heading(self, document: str, cursor: int) -> str | None:
        """Return the trimmed heading of the scene containing the cursor.

        Args:
            document: Full document text
            cursor: Character offset into the document

        Returns:
            The nearest scene heading at or above the cursor line, or None
        """
        lines = self._lines_before_cursor(document, cursor)
        start = self._find_scene_start(lines)
        if start is None:
            return None
        return lines[start].strip()

    def get_current_scene_characters(self, document: str, cursor: int) -> list[str]:
        """Return the characters who speak between the scene heading and cursor.

        Names have dual-dialogue markers and extensions such as ``(V.O.)``
        removed and are listed once, in order of first appearance.
        """
        lines = self._lines_before_cursor(document, cursor)
        start = self._find_scene_start(lines)
        if start is None:
            return []

        characters: list[str] = []
        previous_type: ElementType | None = None
        for line in lines[start + 1 :]:
            element_type = classify_line(line, previous_type)
            if element_type == ElementType.CHARACTER:
                name = clean_character_name(line)
                if name and name not in characters:
                    characters.append(name)
            previous_type = element_type
        return characters

    def get_current_scene_story_beats(self, document: str, cursor: int) -> list[str]:
        """Return the significant action lines of the current scene.

        Action lines count as beats when longer than
        ``story_beat_min_length`` characters and not tag lines.
        """
        lines = self._lines_before_cursor(document, cursor)
        start = self._find_scene_start(lines)
        if start is None:
            return []

        min_length = self.settings.story_beat_min_length
        beats: list[str] = []
        previous_type: ElementType | None = None
        for line in lines[start + 1 :]:
            element_type = classify_line(line, previous_type)
            trimmed = line.strip()
            if (
                element_type == ElementType.ACTION
                and len(trimmed) > min_length
                and not is_fountain_tag(line)
            ):
                beats.append(trimmed)
            previous_type = element_type
        return beats

    def get_current_scene_context(self, document: str, cursor: int) -> SceneContext:
        """Bundle heading, characters and story beats for the cursor's scene."""
        return SceneContext(
            scene_heading=self.get_current_scene_heading(document, cursor),
            characters=self.get_current_scene_characters(document, cursor),
            story_beats=self.get_current_scene_story_beats(document, cursor),
        )

    def detect_scene_from_cursor(self, document: str, cursor: int) -> ActEstimate:
        """Estimate the act of the scene containing the cursor.

        The ordinal of the current scene among all scene headings of the
        document decides the act: below 33% is act 1, below 67% act 2,
        anything later act 3.

        Args:
            document: Full document text
            cursor: Character offset into the document

        Returns:
            ActEstimate; act 1 with no heading when the cursor is before any scene
        """
        lines = self._lines_before_cursor(document, cursor)
        start = self._find_scene_start(lines)
        if start is None:
            return ActEstimate(scene_heading=None, act=1)

        heading = lines[start].strip()
        heading_indexes = [
            index
            for index, line in enumerate(document.split("\n"))
            if is_valid_scene_heading(line)
        ]
        if start not in heading_indexes:
            # Cursor sits inside a partial heading line
            return ActEstimate(scene_heading=heading, act=1)

        position = heading_indexes.index(start) / len(heading_indexes)
        if position < 0.33:
            act = 1
        elif position < 0.67:
            act = 2
        else:
            act = 3
        return ActEstimate(scene_heading=heading, act=act)
