"""Fountain line classification and document parsing for fountainkit."""

from __future__ import annotations

from .fountain_models import (
    ActEstimate,
    ElementType,
    FountainElement,
    SceneContext,
    next_element_type,
)
from .fountain_parser import FountainParser
from .line_classifier import (
    LineContext,
    classify_line,
    iter_lines,
    title_page_length,
    walk_lines,
)

__all__ = [
    "ActEstimate",
    "ElementType",
    "FountainElement",
    "FountainParser",
    "LineContext",
    "SceneContext",
    "classify_line",
    "iter_lines",
    "next_element_type",
    "title_page_length",
    "walk_lines",
]
