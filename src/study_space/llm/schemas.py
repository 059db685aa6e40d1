from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OptionLetter(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"


class QuizOptions(BaseModel):
    A: str
    B: str
    C: str
    D: str


class QuizQuestion(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    subject: str
    topic: str
    question_text: str = Field(alias="questionText")
    options: QuizOptions
    correct_option: OptionLetter = Field(alias="correctOption")
    detailed_explanation: str = Field(alias="detailedExplanation")

    @field_validator("correct_option", mode="before")
    @classmethod
    def _normalize_letter(cls, value: Any) -> Any:
        return value.strip().upper() if isinstance(value, str) else value


class Quiz(BaseModel):
    title: str = Field(min_length=1)
    questions: List[QuizQuestion] = Field(min_length=1)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class AmendmentSummary(BaseModel):
    points: List[str]


class PerformanceStats(BaseModel):
    """Aggregate numbers handed to the AI when asking for study insights."""

    overall_accuracy: float
    total_solved: int
    subject_accuracy: Dict[str, float]
    average_score_percentage: float
    total_challenges: int
