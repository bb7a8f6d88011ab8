"""Tests for automatic Fountain format correction."""

import pytest

from fountainkit.config import FountainKitSettings
from fountainkit.correction import CorrectionResult, FormatCorrector
from fountainkit.validators import (
    FormatIssue,
    FormatValidator,
    IssueSeverity,
    IssueType,
    SingleLineFix,
)


@pytest.fixture
def corrector():
    """Corrector with default settings."""
    return FormatCorrector()


@pytest.fixture
def validator():
    """Validator with default settings."""
    return FormatValidator()


def issue_at(line_number, fix, original_text="x"):
    """Build a heading issue with the given fix."""
    return FormatIssue(
        line_number=line_number,
        severity=IssueSeverity.WARNING,
        type=IssueType.SCENE_HEADING,
        description="test issue",
        original_text=original_text,
        suggested_fix=fix,
    )


class TestCorrect:
    """Test validator-driven correction."""

    def test_fixes_pasted_snippet(self, corrector, validator):
        """Test heading and colon dialogue fixes together."""
        document = "int. office\n\njohn: hi there"
        issues = validator.validate(document).issues

        result = corrector.correct(document, issues)

        assert result.corrected_content == "INT. OFFICE - DAY\n\nJOHN\nhi there"
        assert result.change_count == 2
        assert validator.validate(result.corrected_content).issues == []

    def test_fixes_messy_screenplay(self, corrector, validator, messy_screenplay):
        """Test bottom-up application and the one-fix-per-line rule."""
        issues = validator.validate(messy_screenplay).issues

        result = corrector.correct(messy_screenplay, issues)

        assert result.corrected_content == (
            "INT. OFFICE - DAY\n"
            "\n"
            "JOHN\n"
            "Hi there.\n"
            "Mary\n"
            "Hello John.\n"
            "\n"
            "EXT. PARK - DAY\n"
            "\n"
            "The wind howls.\n"
        )
        assert [issue.line_number for issue in result.applied_fixes] == [7, 3, 1]
        assert result.applied_fixes[0].type == IssueType.SCENE_HEADING
        assert result.change_count == 3
        assert validator.validate(result.corrected_content).is_valid

    def test_second_pass_changes_nothing(self, corrector, validator, messy_screenplay):
        """Test that correcting corrected text is a no-op."""
        first = corrector.correct(
            messy_screenplay, validator.validate(messy_screenplay).issues
        )
        second = corrector.correct(
            first.corrected_content,
            validator.validate(first.corrected_content).issues,
        )

        assert second.corrected_content == first.corrected_content
        assert second.change_count == 0

    def test_issues_without_fix_are_ignored(self, corrector):
        """Test that only fixable issues count."""
        result = corrector.correct("INT. A - DAY", [issue_at(1, None)])

        assert result.change_count == 0
        assert result.applied_fixes == []

    def test_out_of_range_issues_are_skipped(self, corrector):
        """Test line numbers outside the document."""
        issues = [issue_at(0, SingleLineFix("zero")), issue_at(9, SingleLineFix("9"))]

        result = corrector.correct("one\ntwo", issues)

        assert result.corrected_content == "one\ntwo"
        assert result.change_count == 0

    def test_no_issues_still_fixes_spacing(self, corrector):
        """Test the unconditional blank-line pass."""
        result = corrector.correct("JOHN\nHello.\nMARY\nHi.", [])

        assert result.corrected_content == "JOHN\nHello.\n\nMARY\nHi."
        assert result.change_count == 0

    def test_blank_after_heading(self, corrector):
        """Test blank lines after headings but not between them."""
        result = corrector.correct("INT. A - DAY\nINT. B - DAY\nAction.", [])

        assert result.corrected_content == "INT. A - DAY\nINT. B - DAY\n\nAction."

    def test_heading_is_trimmed(self, corrector):
        """Test whitespace around headings."""
        result = corrector.correct("  INT. A - DAY  \n\nGo.", [])

        assert result.corrected_content == "INT. A - DAY\n\nGo."

    def test_title_page_is_untouched(self, corrector):
        """Test that title page lines are copied verbatim."""
        document = "Title: X\nAuthor:   Y  \n\nINT. A - DAY\nGo."

        result = corrector.correct(document, [])

        assert result.corrected_content == (
            "Title: X\nAuthor:   Y  \n\nINT. A - DAY\n\nGo."
        )

    def test_to_dict(self, corrector, validator):
        """Test the JSON-ready representation."""
        document = "int. office"
        result = corrector.correct(document, validator.validate(document).issues)

        data = result.to_dict()

        assert data["corrected_content"] == "INT. OFFICE - DAY"
        assert data["change_count"] == 1
        assert data["applied_fixes"][0]["suggested_fix"] == "INT. OFFICE - DAY"


class TestQuickCorrect:
    """Test the regex-only correction pass."""

    def test_uppercases_and_adds_time(self, corrector):
        """Test heading clean-up without the validator."""
        document = "int. office\n\next park - night\nINT. LAB"

        assert corrector.quick_correct(document) == (
            "INT. OFFICE - DAY\n\nEXT. PARK - NIGHT\nINT. LAB - DAY"
        )

    def test_combined_prefix(self, corrector):
        """Test INT./EXT. headings."""
        assert corrector.quick_correct("int./ext. car") == "INT./EXT. CAR - DAY"

    def test_bare_combined_prefix(self, corrector):
        """Test a bare I/E prefix gets its canonical spelling."""
        assert corrector.quick_correct("I/E CAR") == "I./E. CAR - DAY"

    def test_hyphenated_location(self, corrector):
        """Test a hyphen in the location does not count as a time."""
        assert corrector.quick_correct("INT. SELF-STORAGE UNIT") == (
            "INT. SELF-STORAGE UNIT - DAY"
        )

    def test_other_lines_untouched(self, corrector):
        """Test that only heading lines change."""
        document = "Internal memo.\nINT. ROOM - DAY\nShe reads it."

        assert corrector.quick_correct(document) == document

    def test_default_time_from_settings(self):
        """Test the configured time of day."""
        corrector = FormatCorrector(FountainKitSettings(default_time_of_day="NIGHT"))

        assert corrector.quick_correct("EXT. ROOF") == "EXT. ROOF - NIGHT"


class TestSmartFormat:
    """Test the helper passes combined by smart_format."""

    def test_normalize_character_names(self, corrector):
        """Test that mixed-case copies of known names are uppercased."""
        document = "JOHN\nHello.\n\nJohn\nHi."

        assert corrector.normalize_character_names(document) == (
            "JOHN\nHello.\n\nJOHN\nHi."
        )

    def test_unknown_names_untouched(self, corrector):
        """Test mixed-case lines that match no cue."""
        document = "JOHN\nHello.\n\nMary\nHi."

        assert corrector.normalize_character_names(document) == document

    def test_ensure_proper_spacing(self, corrector):
        """Test blank line collapsing and insertion."""
        document = "\n\nINT. A - DAY\nShe waits.\n\n\n\nJOHN\nHi.\nMARY\nYo."

        assert corrector.ensure_proper_spacing(document) == (
            "INT. A - DAY\n\nShe waits.\n\nJOHN\nHi.\n\nMARY\nYo."
        )

    def test_smart_format(self, corrector):
        """Test the full cheap formatting pipeline."""
        document = "int. office\nShe sits.\n\nBOB\nHi.\nBob\nAgain."

        assert corrector.smart_format(document) == (
            "INT. OFFICE - DAY\n\nShe sits.\n\nBOB\nHi.\n\nBOB\nAgain."
        )


def test_result_defaults():
    """Test an empty correction result."""
    result = CorrectionResult(corrected_content="")

    assert result.applied_fixes == []
    assert result.change_count == 0
