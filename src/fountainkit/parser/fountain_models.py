"""Data models for Fountain screenplay parsing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ElementType(str, Enum):
    """Role of a single physical line in a Fountain document."""

    SCENE_HEADING = "scene_heading"
    ACTION = "action"
    CHARACTER = "character"
    DIALOGUE = "dialogue"
    PARENTHETICAL = "parenthetical"
    TRANSITION = "transition"
    CENTERED = "centered"
    PAGE_BREAK = "page_break"
    SECTION = "section"
    SYNOPSIS = "synopsis"
    NOTE = "note"
    LYRICS = "lyrics"
    TITLE_PAGE = "title_page"
    EMPTY = "empty"


# Element the editor switches to when Enter is pressed on a line of this type
NEXT_ELEMENT_TYPE: dict[ElementType, ElementType] = {
    ElementType.SCENE_HEADING: ElementType.ACTION,
    ElementType.ACTION: ElementType.ACTION,
    ElementType.CHARACTER: ElementType.DIALOGUE,
    ElementType.DIALOGUE: ElementType.ACTION,
    ElementType.PARENTHETICAL: ElementType.DIALOGUE,
    ElementType.TRANSITION: ElementType.SCENE_HEADING,
}


def next_element_type(current: ElementType) -> ElementType:
    """Return the element type that follows ``current`` on Enter.

    Args:
        current: Type of the line the cursor is leaving

    Returns:
        Expected type of the new line, ``ACTION`` when there is no rule
    """
    return NEXT_ELEMENT_TYPE.get(current, ElementType.ACTION)


@dataclass(frozen=True)
class FountainElement:
    """One classified line of a Fountain document."""

    type: ElementType
    text: str
    line_number: int


@dataclass
class SceneContext:
    """Scene surrounding a cursor position, used to build prompt context."""

    scene_heading: str | None
    characters: list[str] = field(default_factory=list)
    story_beats: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ActEstimate:
    """Three-act position of the scene containing a cursor."""

    scene_heading: str | None
    act: int
