"""Result models for screenplay entity extraction."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any


class LocationType(str, Enum):
    """Interior/exterior classification of a location."""

    INT = "INT"
    EXT = "EXT"
    INT_EXT = "INT/EXT"

    @classmethod
    def from_prefix(cls, prefix: str) -> LocationType:
        """Map a scene heading prefix such as ``EST`` or ``I./E.`` to a type."""
        normalized = prefix.upper().replace(".", "")
        if "/" in normalized:
            return cls.INT_EXT
        if normalized == "INT":
            return cls.INT
        return cls.EXT


class QuestionableKind(str, Enum):
    """What a questionable line appears to be declaring."""

    CHARACTER = "character"
    LOCATION = "location"
    SCENE_HEADING = "scene_heading"


@dataclass
class ExtractedScene:
    """A scene found during extraction.

    ``start_line`` and ``end_line`` are 0-based, inclusive line indexes.
    """

    heading: str
    location: str
    location_type: LocationType
    start_line: int
    end_line: int
    characters: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class QuestionableItem:
    """A line that looks like an entity but fails a strict rule."""

    type: QuestionableKind
    text: str
    line_number: int
    reason: str
    suggestion: str | None = None


@dataclass
class AutoImportResult:
    """Everything extracted from one screenplay document."""

    locations: list[str] = field(default_factory=list)
    characters: list[str] = field(default_factory=list)
    character_descriptions: dict[str, str] = field(default_factory=dict)
    location_types: dict[str, LocationType] = field(default_factory=dict)
    scenes: list[ExtractedScene] = field(default_factory=list)
    questionable_items: list[QuestionableItem] = field(default_factory=list)
    name_map: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serialisable dictionary."""
        data = asdict(self)
        data["location_types"] = {
            name: location_type.value
            for name, location_type in self.location_types.items()
        }
        for scene in data["scenes"]:
            scene["location_type"] = scene["location_type"].value
        for item in data["questionable_items"]:
            item["type"] = item["type"].value
        return data
