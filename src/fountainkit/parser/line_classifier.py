"""Line classification for the Fountain screenplay format.

Every physical line gets exactly one :class:`ElementType`. Classification is
context sensitive only through the type of the line directly above it, which
callers thread from one call to the next. :func:`walk_lines` does that
threading once for every pass that scans a whole document.

Reference: https://fountain.io/syntax
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field

from fountainkit.parser.fountain_models import ElementType

# Longer prefixes first so INT./EXT. is never read as INT
SCENE_PREFIX = r"(?:INT\.?/EXT|I\.?/E|INT|EXT|EST)"
SCENE_HEADING_PATTERN = re.compile(rf"^{SCENE_PREFIX}[.\s]", re.IGNORECASE)

TRANSITION_PATTERN = re.compile(r"^[A-Z\s]+TO:$")
CENTERED_PATTERN = re.compile(r"^>.*<$")
SECTION_PATTERN = re.compile(r"^#+\s")
SYNOPSIS_PATTERN = re.compile(r"^=\s")
NOTE_PATTERN = re.compile(r"^\[\[.*\]\]$")
LYRICS_PATTERN = re.compile(r"^~.*~$")
PARENTHETICAL_PATTERN = re.compile(r"^\(.*\)$")

# Uppercase cue with an optional extension such as (V.O.) and dual-dialogue ^
CHARACTER_PATTERN = re.compile(r"^[A-Z0-9\s'#]+(?:\s*\([A-Z0-9\s.'#/-]*\))?\s*\^?$")
CHARACTER_MAX_LENGTH = 40

BOILERPLATE_PATTERN = re.compile(
    r"^(?:THE END|END|FADE OUT|FADE IN|FADE TO BLACK|BLACK|CUT TO|DISSOLVE TO|"
    r"CONTINUED|MORE|CONT'D)\.?$",
    re.IGNORECASE,
)
NARRATIVE_HEADING_PATTERN = re.compile(
    r"^(?:THE .* GOES LIVE|THE .* BEGINS|THE .* ENDS)$", re.IGNORECASE
)

TITLE_PAGE_KEY_PATTERN = re.compile(
    r"^(?:Title|Credit|Author|Authors|Source|Draft date|Date|Contact|Copyright|"
    r"Notes|Revision)\s*:",
    re.IGNORECASE,
)

FOUNTAIN_TAG_PATTERN = re.compile(r"^@(?:location|characters?|scene):", re.IGNORECASE)

_CUE_EXTENSION_PATTERN = re.compile(r"\(.*\)$")
_EXPAND_HEADING_PATTERN = re.compile(
    rf"^({SCENE_PREFIX})[.\s]+(.*)$", re.IGNORECASE | re.DOTALL
)

_CHARACTER_PREVIOUS_TYPES = frozenset(
    {None, ElementType.EMPTY, ElementType.DIALOGUE, ElementType.PARENTHETICAL}
)
_DIALOGUE_PREVIOUS_TYPES = frozenset(
    {ElementType.CHARACTER, ElementType.PARENTHETICAL, ElementType.DIALOGUE}
)


def classify_line(
    line: str, previous_type: ElementType | None = None
) -> ElementType:
    """Detect the Fountain element type of a single line.

    Rules are evaluated in order and the first match wins. Anything that
    matches no rule is action.

    Args:
        line: Raw line text (surrounding whitespace is ignored)
        previous_type: Type of the line directly above, None at document start

    Returns:
        The element type of the line
    """
    trimmed = line.strip()

    if not trimmed:
        return ElementType.EMPTY

    if SCENE_HEADING_PATTERN.match(trimmed):
        return ElementType.SCENE_HEADING

    if TRANSITION_PATTERN.match(trimmed):
        return ElementType.TRANSITION

    if CENTERED_PATTERN.match(trimmed):
        return ElementType.CENTERED

    if trimmed == "===":
        return ElementType.PAGE_BREAK

    if SECTION_PATTERN.match(trimmed):
        return ElementType.SECTION

    if SYNOPSIS_PATTERN.match(trimmed):
        return ElementType.SYNOPSIS

    if NOTE_PATTERN.match(trimmed):
        return ElementType.NOTE

    if LYRICS_PATTERN.match(trimmed):
        return ElementType.LYRICS

    if PARENTHETICAL_PATTERN.match(trimmed):
        return ElementType.PARENTHETICAL

    if (
        previous_type in _CHARACTER_PREVIOUS_TYPES
        and len(trimmed) < CHARACTER_MAX_LENGTH
        and CHARACTER_PATTERN.match(trimmed)
        and re.search(r"[A-Z]", trimmed)
    ):
        if BOILERPLATE_PATTERN.match(trimmed):
            return ElementType.TRANSITION
        if NARRATIVE_HEADING_PATTERN.match(trimmed):
            return ElementType.ACTION
        return ElementType.CHARACTER

    if previous_type in _DIALOGUE_PREVIOUS_TYPES:
        if trimmed.startswith("(") and trimmed.endswith(")"):
            return ElementType.PARENTHETICAL
        return ElementType.DIALOGUE

    return ElementType.ACTION


def clean_character_name(text: str) -> str:
    """Strip the dual-dialogue marker and a trailing extension from a cue.

    ``"JOHN (V.O.)^"`` becomes ``"JOHN"``.
    """
    name = text.strip()
    if name.endswith("^"):
        name = name[:-1]
    return _CUE_EXTENSION_PATTERN.sub("", name.rstrip()).strip()


def is_fountain_tag(line: str) -> bool:
    """Return True for an @location:, @character(s): or @scene: tag line."""
    return bool(FOUNTAIN_TAG_PATTERN.match(line.strip()))


def is_valid_scene_heading(text: str) -> bool:
    """Return True if the text starts with a scene heading prefix."""
    return bool(SCENE_HEADING_PATTERN.match(text.strip()))


def is_valid_character_name(text: str) -> bool:
    """Return True for an all-caps name of letters and spaces under 40 chars."""
    trimmed = text.strip()
    return (
        bool(re.match(r"^[A-Z\s]+\^?$", trimmed))
        and len(trimmed) < CHARACTER_MAX_LENGTH
    )


def expand_scene_heading(text: str) -> str:
    """Uppercase a heading and normalise a bare ``INT``/``EXT``/``EST`` prefix.

    ``"int kitchen"`` becomes ``"INT. KITCHEN"``. Combined prefixes such as
    ``INT./EXT.`` are only uppercased.
    """
    upper = text.strip().upper()
    match = _EXPAND_HEADING_PATTERN.match(upper)
    if not match:
        return upper
    prefix, rest = match.group(1), match.group(2)
    if prefix in {"INT", "EXT", "EST"}:
        return f"{prefix}. {rest}".rstrip()
    return upper


def format_element(text: str, element_type: ElementType) -> str:
    """Format text the way an element of the given type is written.

    Args:
        text: Raw text typed by the user
        element_type: Element the text should become

    Returns:
        Trimmed text with the casing or markers the element requires
    """
    trimmed = text.strip()

    if element_type in (
        ElementType.SCENE_HEADING,
        ElementType.CHARACTER,
        ElementType.TRANSITION,
    ):
        return trimmed.upper()

    markers: dict[ElementType, tuple[str, str, str]] = {
        # type: (expected start, template prefix, template suffix)
        ElementType.PARENTHETICAL: ("(", "(", ")"),
        ElementType.CENTERED: (">", "> ", " <"),
        ElementType.LYRICS: ("~", "~ ", " ~"),
        ElementType.SECTION: ("#", "# ", ""),
        ElementType.SYNOPSIS: ("=", "= ", ""),
        ElementType.NOTE: ("[[", "[[ ", " ]]"),
    }
    if element_type in markers:
        start, prefix, suffix = markers[element_type]
        if not trimmed.startswith(start):
            return f"{prefix}{trimmed}{suffix}"

    return trimmed


def title_page_length(lines: Sequence[str]) -> int:
    """Count the leading lines that form a Fountain title page.

    A title page starts on the first line with a known ``Key:`` and runs
    until the first blank line. Indented lines continue the previous key;
    any other line ends the block.

    Args:
        lines: Document lines

    Returns:
        Number of title page lines (0 when the document has none)
    """
    if not lines or not TITLE_PAGE_KEY_PATTERN.match(lines[0]):
        return 0

    count = 0
    for line in lines:
        if not line.strip():
            break
        if TITLE_PAGE_KEY_PATTERN.match(line) or line[:1] in (" ", "\t"):
            count += 1
            continue
        break
    return count


@dataclass(frozen=True)
class LineContext:
    """A line seen by :func:`walk_lines`, with its classification context."""

    index: int
    text: str
    element_type: ElementType
    previous_type: ElementType | None
    lines: Sequence[str] = field(repr=False)

    @property
    def line_number(self) -> int:
        """1-based line number."""
        return self.index + 1

    @property
    def trimmed(self) -> str:
        """Line text without surrounding whitespace."""
        return self.text.strip()

    @property
    def next_line(self) -> str | None:
        """Raw text of the following line, None on the last line."""
        if self.index + 1 < len(self.lines):
            return self.lines[self.index + 1]
        return None


def iter_lines(document: str) -> Iterator[LineContext]:
    """Classify every line of a document, threading the previous type.

    The document is split on ``\\n`` only; carriage returns stay on the line
    and are treated as trailing whitespace. Lines of a leading title page are
    typed ``TITLE_PAGE``.

    Args:
        document: Raw screenplay text

    Yields:
        One LineContext per physical line, in order
    """
    lines = document.split("\n")
    title_lines = title_page_length(lines)
    previous_type: ElementType | None = None

    for index, line in enumerate(lines):
        if index < title_lines:
            element_type = ElementType.TITLE_PAGE
        else:
            element_type = classify_line(line, previous_type)
        yield LineContext(
            index=index,
            text=line,
            element_type=element_type,
            previous_type=previous_type,
            lines=lines,
        )
        previous_type = element_type


def walk_lines(document: str, visitor: Callable[[LineContext], None]) -> int:
    """Run a per-line visitor over a classified document.

    Args:
        document: Raw screenplay text
        visitor: Called once per line with its LineContext

    Returns:
        Number of lines visited
    """
    count = 0
    for context in iter_lines(document):
        visitor(context)
        count += 1
    return count
