"""Automatic Fountain format correction for fountainkit."""

from __future__ import annotations

from .format_corrector import CorrectionResult, FormatCorrector

__all__ = ["CorrectionResult", "FormatCorrector"]
