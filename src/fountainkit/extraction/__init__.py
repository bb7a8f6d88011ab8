"""Screenplay entity extraction (auto-import) for fountainkit."""

from __future__ import annotations

from .entity_extractor import (
    EntityExtractor,
    format_character_name,
    format_location_name,
    should_auto_import,
)
from .models import (
    AutoImportResult,
    ExtractedScene,
    LocationType,
    QuestionableItem,
    QuestionableKind,
)
from .name_deduplicator import NameDeduplicator

__all__ = [
    "AutoImportResult",
    "EntityExtractor",
    "ExtractedScene",
    "LocationType",
    "NameDeduplicator",
    "QuestionableItem",
    "QuestionableKind",
    "format_character_name",
    "format_location_name",
    "should_auto_import",
]
