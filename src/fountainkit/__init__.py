"""fountainkit: Fountain screenplay parsing, validation and correction.

The pipeline is built from independent passes over plain text:

* :mod:`fountainkit.parser` classifies lines and answers cursor queries
* :mod:`fountainkit.extraction` imports scenes, locations and characters
* :mod:`fountainkit.validators` reports formatting problems with fixes
* :mod:`fountainkit.correction` applies those fixes
"""

from __future__ import annotations

from fountainkit.correction import CorrectionResult, FormatCorrector
from fountainkit.extraction import AutoImportResult, EntityExtractor
from fountainkit.parser import ElementType, FountainElement, FountainParser
from fountainkit.validators import FormatIssue, FormatValidator, ValidationResult

__version__ = "0.1.0"

__all__ = [
    "AutoImportResult",
    "CorrectionResult",
    "ElementType",
    "EntityExtractor",
    "FormatCorrector",
    "FormatIssue",
    "FormatValidator",
    "FountainElement",
    "FountainParser",
    "ValidationResult",
    "__version__",
]
