"""Character name deduplication for extraction results.

Screenplays often introduce a character by first name and later use a
fuller name (or the other way round). Names are merged when one occurs in
the other as a whole word, keeping the longer name as canonical.
"""

from __future__ import annotations

import re
from dataclasses import replace

from fountainkit.config import FountainKitSettings, get_logger, get_settings
from fountainkit.extraction.models import AutoImportResult, ExtractedScene

logger = get_logger(__name__)


class NameDeduplicator:
    """Greedy, single-pass character name canonicalisation.

    Names are visited longest first. Each name either maps onto the first
    already accepted canonical name it is similar to, or becomes canonical
    itself. There is no transitive closure: ``ANN`` can merge into
    ``ANN MARIE`` even when both are distinct people.
    """

    def __init__(self, settings: FountainKitSettings | None = None) -> None:
        """Initialize the deduplicator.

        Args:
            settings: Settings to use, defaults to the global settings
        """
        self.settings = settings or get_settings()
        self.min_name_length = self.settings.dedup_min_name_length

    def is_similar(self, first: str, second: str) -> bool:
        """Return True if two names refer to the same character.

        Args:
            first: A character name
            second: Another character name

        Returns:
            True when identical, or when the shorter name appears in the
            longer one on alphanumeric boundaries and is long enough
        """
        if first == second:
            return True

        shorter, longer = sorted((first, second), key=len)
        if len(shorter) < self.min_name_length or len(shorter) == len(longer):
            return False

        # Custom boundary: not preceded/followed by [A-Za-z0-9]
        pattern = rf"(?<![A-Za-z0-9]){re.escape(shorter)}(?![A-Za-z0-9])"
        return re.search(pattern, longer, re.IGNORECASE) is not None

    def build_name_map(self, names: list[str]) -> dict[str, str]:
        """Map every name onto its canonical form.

        Args:
            names: Extracted character names, in any order

        Returns:
            Mapping of each input name (aliases and canonical names alike)
            to its canonical name
        """
        name_map: dict[str, str] = {}
        canonical: list[str] = []

        for name in sorted(dict.fromkeys(names), key=len, reverse=True):
            match = next((c for c in canonical if self.is_similar(name, c)), None)
            if match is None:
                canonical.append(name)
                name_map[name] = name
            else:
                name_map[name] = match
                logger.debug("Merged character alias", alias=name, canonical=match)

        return name_map

    def deduplicate(self, result: AutoImportResult) -> AutoImportResult:
        """Rewrite an extraction result through the canonical name map.

        Characters, descriptions and per-scene character lists are
        rewritten and deduplicated in order of first appearance. The
        description of a merged alias is appended to the canonical one.

        Args:
            result: Raw extraction result

        Returns:
            A new result with canonical names and ``name_map`` filled in
        """
        name_map = self.build_name_map(result.characters)

        def canonical(name: str) -> str:
            return name_map.get(name, name)

        characters = list(dict.fromkeys(canonical(c) for c in result.characters))

        descriptions: dict[str, str] = {}
        for name, description in result.character_descriptions.items():
            target = canonical(name)
            existing = descriptions.get(target, "")
            if existing and description:
                descriptions[target] = f"{existing} {description}"
            else:
                descriptions[target] = existing or description

        scenes: list[ExtractedScene] = [
            replace(
                scene,
                characters=list(dict.fromkeys(canonical(c) for c in scene.characters)),
            )
            for scene in result.scenes
        ]

        merged = len(result.characters) - len(characters)
        if merged:
            logger.info(
                "Deduplicated character names",
                before=len(result.characters),
                after=len(characters),
            )

        return replace(
            result,
            characters=characters,
            character_descriptions=descriptions,
            scenes=scenes,
            name_map=name_map,
        )
