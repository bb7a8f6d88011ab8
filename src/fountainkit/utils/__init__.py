"""Utility modules for fountainkit."""

from __future__ import annotations

from fountainkit.utils.normalizer import normalize_screenplay_text
from fountainkit.utils.screenplay import (
    CharacterCount,
    SceneHeadingParts,
    SceneTags,
    ScreenplayUtils,
)

__all__ = [
    "CharacterCount",
    "SceneHeadingParts",
    "SceneTags",
    "ScreenplayUtils",
    "normalize_screenplay_text",
]
