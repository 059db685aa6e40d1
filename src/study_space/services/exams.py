from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from ..domain import Countdown, Exam
from ..domain.models import parse_datetime
from .context import ServiceContext


def parse_exam_date(value: Any) -> datetime:
    try:
        return parse_datetime(value)
    except ValueError as exc:  # noqa: TRY003
        raise ValueError(f"Invalid exam date: {value!r}") from exc


@dataclass(slots=True)
class ExamService:
    context: ServiceContext

    def list_exams(self) -> list[Exam]:
        return self.context.exams.items

    def add(self, name: str, date: Any, *, now: Optional[datetime] = None) -> Exam:
        if not name.strip():
            raise ValueError("Exam name must not be empty.")
        return self.context.exams.create(
            name=name.strip(),
            date=parse_exam_date(date),
            start_date=now or datetime.now(timezone.utc),
            progress=0,
        )

    def update(self, exam_id: int, **changes: Any) -> Exam | None:
        for key in ("date", "start_date"):
            if key in changes:
                changes[key] = parse_exam_date(changes[key])
        if "progress" in changes and not 0 <= int(changes["progress"]) <= 100:
            raise ValueError("Exam progress must be between 0 and 100.")
        return self.context.exams.update(exam_id, **changes)

    def delete(self, exam_id: int) -> None:
        self.context.exams.delete(exam_id)

    def countdowns(self, now: Optional[datetime] = None) -> list[tuple[Exam, Countdown]]:
        return [(exam, exam.countdown(now)) for exam in self.context.exams]
