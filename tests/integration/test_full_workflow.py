"""End-to-end tests: import, validate, correct and extract a screenplay."""

import pytest

from fountainkit import (
    EntityExtractor,
    FormatCorrector,
    FormatValidator,
    FountainParser,
)
from fountainkit.cli.commands.stats import collect_stats
from fountainkit.extraction import LocationType
from fountainkit.utils import normalize_screenplay_text

pytestmark = pytest.mark.integration

PASTED_SCRIPT = (
    "int. diner - night\r\n"
    "\r\n"
    "Sam waits at the\r\n"
    "counter.\r\n"
    "\r\n"
    "SAM\r\n"
    "Coffee, black.\r\n"
    "WAITRESS\r\n"
    "Coming up.\r\n"
)


class TestImportWorkflow:
    """Test the pipeline a pasted screenplay goes through."""

    def test_pasted_script_to_entities(self, settings):
        """Test normalising, fixing and extracting a pasted script."""
        normalized = normalize_screenplay_text(PASTED_SCRIPT)
        assert normalized == (
            "int. diner - night\n\n"
            "Sam waits at the counter.\n\n"
            "SAM\nCoffee, black.\n\n"
            "WAITRESS\nComing up."
        )

        validator = FormatValidator(settings)
        issues = validator.validate(normalized).issues
        assert [(i.line_number, i.suggested_fix.text) for i in issues] == [
            (1, "INT. DINER - NIGHT")
        ]

        corrected = (
            FormatCorrector(settings).correct(normalized, issues).corrected_content
        )
        assert corrected.startswith("INT. DINER - NIGHT\n\n")
        assert validator.validate(corrected).is_valid

        result = EntityExtractor(settings).extract(corrected)
        assert result.locations == ["DINER"]
        assert result.location_types == {"DINER": LocationType.INT}
        assert result.characters == ["SAM", "WAITRESS"]
        assert [(s.start_line, s.end_line) for s in result.scenes] == [(0, 8)]
        assert result.questionable_items == []

        stats = collect_stats(corrected, settings)
        assert stats["scenes"] == 1
        assert stats["speaking_characters"] == 2
        assert stats["dialogue_lines"] == 2
        assert stats["action_lines"] == 1

        context = FountainParser(settings).get_current_scene_context(
            corrected, len(corrected)
        )
        assert context.scene_heading == "INT. DINER - NIGHT"
        assert context.characters == ["SAM", "WAITRESS"]
        assert context.story_beats == ["Sam waits at the counter."]

    def test_messy_script_round_trip(self, settings, messy_screenplay):
        """Test a corrected script validates and extracts cleanly."""
        validator = FormatValidator(settings)
        result = validator.validate(messy_screenplay)
        assert not result.is_valid

        corrected = (
            FormatCorrector(settings)
            .correct(messy_screenplay, result.issues)
            .corrected_content
        )
        assert validator.validate(corrected).is_valid

        extracted = EntityExtractor(settings).extract(corrected)
        assert extracted.locations == ["OFFICE", "PARK"]
        assert extracted.characters == ["JOHN"]
        assert [(s.start_line, s.end_line) for s in extracted.scenes] == [
            (0, 6),
            (7, 10),
        ]

    def test_sample_screenplay_is_stable(self, settings, sample_screenplay):
        """Test a clean screenplay passes through correction unchanged."""
        validator = FormatValidator(settings)
        result = validator.validate(sample_screenplay)
        assert result.is_valid

        corrected = FormatCorrector(settings).correct(sample_screenplay, [])
        assert corrected.corrected_content == sample_screenplay
        assert corrected.change_count == 0

        parser = FountainParser(settings)
        exported = parser.export_to_fountain(parser.parse(sample_screenplay))
        assert exported == sample_screenplay


class TestCustomSettings:
    """Test settings flowing through the pipeline."""

    def test_default_time_of_day(self, settings):
        """Test the configured time of day is used by every pass."""
        night = settings.model_copy(update={"default_time_of_day": "NIGHT"})
        document = "int. garage\n\nHe waits."

        issues = FormatValidator(night).validate(document).issues
        corrected = FormatCorrector(night).correct(document, issues)
        extracted = EntityExtractor(night).extract(document)

        assert corrected.corrected_content.startswith("INT. GARAGE - NIGHT")
        assert extracted.questionable_items[0].suggestion == "INT. GARAGE - NIGHT"
