"""Generative AI client and response schemas."""

from __future__ import annotations

from .schemas import AmendmentSummary, OptionLetter, PerformanceStats, Quiz, QuizOptions, QuizQuestion
from .tutor import TutorClient

__all__ = [
    "AmendmentSummary",
    "OptionLetter",
    "PerformanceStats",
    "Quiz",
    "QuizOptions",
    "QuizQuestion",
    "TutorClient",
]
