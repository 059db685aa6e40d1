from __future__ import annotations

from typing import Any, Dict, Iterable, List

from ..domain import Countdown, Exam
from ..domain.models import to_payload
from ..llm import Quiz


def serialize(entity: Any) -> Dict[str, Any]:
    return to_payload(entity)


def serialize_many(entities: Iterable[Any]) -> List[Dict[str, Any]]:
    return [to_payload(entity) for entity in entities]


def serialize_countdown(exam: Exam, countdown: Countdown) -> Dict[str, Any]:
    return {"exam": to_payload(exam), "countdown": countdown.to_dict()}


def serialize_quiz(quiz: Quiz, *, reveal_answers: bool) -> Dict[str, Any]:
    payload = quiz.to_dict()
    if not reveal_answers:
        for question in payload["questions"]:
            question.pop("correctOption", None)
            question.pop("detailedExplanation", None)
    return payload
