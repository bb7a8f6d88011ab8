"""Tests for the Fountain document parser and cursor queries."""

import pytest

from fountainkit.config import FountainKitSettings
from fountainkit.exceptions import FountainFileNotFoundError
from fountainkit.parser import (
    ActEstimate,
    ElementType,
    FountainElement,
    FountainParser,
    SceneContext,
)

TWO_SCENES = (
    "INT. KITCHEN - DAY\n"
    "\n"
    "JOHN\n"
    "Hello.\n"
    "\n"
    "John opens the fridge slowly.\n"
    "@location: abc-123\n"
    "\n"
    "MARY (V.O.)\n"
    "Goodbye.\n"
    "\n"
    "EXT. STREET - NIGHT\n"
    "\n"
    "SARAH\n"
    "Hi."
)


@pytest.fixture
def parser():
    """Parser with default settings."""
    return FountainParser()


class TestParse:
    """Test full-document parsing."""

    def test_parse_sample_screenplay(self, parser, sample_screenplay):
        """Test element types and 1-based line numbers."""
        elements = parser.parse(sample_screenplay)

        assert len(elements) == len(sample_screenplay.split("\n"))
        assert elements[0] == FountainElement(
            type=ElementType.TITLE_PAGE,
            text="Title: The Coffee Shop",
            line_number=1,
        )
        assert elements[4].type == ElementType.SCENE_HEADING
        assert elements[4].line_number == 5
        assert elements[8].type == ElementType.CHARACTER
        assert elements[9].type == ElementType.PARENTHETICAL
        assert elements[10].type == ElementType.DIALOGUE
        assert elements[25].type == ElementType.TRANSITION

    def test_parse_empty_document(self, parser):
        """Test that an empty document still has one line."""
        assert parser.parse("") == [
            FountainElement(type=ElementType.EMPTY, text="", line_number=1)
        ]

    def test_unrecognised_lines_fall_back_to_action(self, parser):
        """Test that parsing never fails on odd input."""
        elements = parser.parse("}}}{{{\n\x00\x01\n%%%")

        assert [e.type for e in elements] == [ElementType.ACTION] * 3

    def test_export_round_trip(self, parser, sample_screenplay):
        """Test that exporting parsed elements restores the text."""
        elements = parser.parse(sample_screenplay)
        exported = FountainParser.export_to_fountain(elements)

        assert exported == sample_screenplay
        assert [e.type for e in parser.parse(exported)] == [e.type for e in elements]

    def test_parse_file(self, parser, screenplay_file):
        """Test parsing from disk."""
        elements = parser.parse_file(screenplay_file)

        assert elements[4].text == "INT. COFFEE SHOP - DAY"

    def test_parse_missing_file(self, parser, tmp_path):
        """Test the error raised for a missing file."""
        missing = tmp_path / "missing.fountain"

        with pytest.raises(FountainFileNotFoundError) as exc_info:
            parser.parse_file(missing)

        assert exc_info.value.path == missing
        assert "missing.fountain" in str(exc_info.value)


class TestCursorQueries:
    """Test the scene queries driven by a cursor offset."""

    def test_heading_at_end_of_document(self, parser):
        """Test the scene heading nearest to the cursor."""
        assert (
            parser.get_current_scene_heading(TWO_SCENES, len(TWO_SCENES))
            == "EXT. STREET - NIGHT"
        )

    def test_heading_in_first_scene(self, parser):
        """Test a cursor placed before the second heading."""
        cursor = TWO_SCENES.index("EXT. STREET")

        assert parser.get_current_scene_heading(TWO_SCENES, cursor) == (
            "INT. KITCHEN - DAY"
        )

    def test_no_heading_before_cursor(self, parser):
        """Test a cursor above every scene heading."""
        assert parser.get_current_scene_heading(TWO_SCENES, 0) is None
        assert parser.get_current_scene_heading("Just prose.", 5) is None
        assert parser.get_current_scene_characters(TWO_SCENES, 0) == []
        assert parser.get_current_scene_story_beats(TWO_SCENES, 0) == []

    def test_characters_are_cleaned_and_unique(self, parser):
        """Test extension stripping and first-appearance order."""
        cursor = TWO_SCENES.index("EXT. STREET")

        assert parser.get_current_scene_characters(TWO_SCENES, cursor) == [
            "JOHN",
            "MARY",
        ]

    def test_characters_stop_at_cursor(self, parser):
        """Test that cues after the cursor are ignored."""
        cursor = TWO_SCENES.index("MARY")

        assert parser.get_current_scene_characters(TWO_SCENES, cursor) == ["JOHN"]

    def test_dual_dialogue_marker_removed(self, parser):
        """Test that the ^ marker is not part of the name."""
        document = "INT. ROOM - DAY\n\nBOB\nHi.\n\nALICE^\nHello."

        assert parser.get_current_scene_characters(document, len(document)) == [
            "BOB",
            "ALICE",
        ]

    def test_story_beats_skip_short_lines_and_tags(self, parser):
        """Test which action lines count as story beats."""
        cursor = TWO_SCENES.index("EXT. STREET")

        assert parser.get_current_scene_story_beats(TWO_SCENES, cursor) == [
            "John opens the fridge slowly."
        ]

    def test_story_beat_length_from_settings(self):
        """Test the configurable story beat threshold."""
        parser = FountainParser(FountainKitSettings(story_beat_min_length=50))
        cursor = TWO_SCENES.index("EXT. STREET")

        assert parser.get_current_scene_story_beats(TWO_SCENES, cursor) == []

    def test_scene_context(self, parser):
        """Test the bundled scene context."""
        cursor = TWO_SCENES.index("EXT. STREET")

        assert parser.get_current_scene_context(TWO_SCENES, cursor) == SceneContext(
            scene_heading="INT. KITCHEN - DAY",
            characters=["JOHN", "MARY"],
            story_beats=["John opens the fridge slowly."],
        )


class TestActEstimate:
    """Test three-act estimation from the cursor position."""

    @pytest.fixture
    def ten_scenes(self):
        """Document with ten scene headings."""
        return "\n\n".join(f"INT. ROOM {i} - DAY" for i in range(10))

    @pytest.mark.parametrize(
        ("scene", "act"),
        [(0, 1), (3, 1), (4, 2), (6, 2), (7, 3), (9, 3)],
    )
    def test_act_buckets(self, parser, ten_scenes, scene, act):
        """Test the 33% and 67% act boundaries."""
        heading = f"INT. ROOM {scene} - DAY"
        cursor = ten_scenes.index(heading) + len(heading)

        assert parser.detect_scene_from_cursor(ten_scenes, cursor) == ActEstimate(
            scene_heading=heading, act=act
        )

    def test_no_heading_defaults_to_act_one(self, parser):
        """Test the default when the cursor is before any scene."""
        assert parser.detect_scene_from_cursor("Some prose.", 4) == ActEstimate(
            scene_heading=None, act=1
        )

    def test_negative_cursor(self, parser, ten_scenes):
        """Test that a negative cursor behaves like the document start."""
        assert parser.detect_scene_from_cursor(ten_scenes, -5).scene_heading is None
