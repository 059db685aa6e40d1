from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .enums import DoubtType, ProblemStatus

_FRACTION = re.compile(r"\.(\d+)(?=[+-]|$)")


def parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(_normalize_fraction(value.replace("Z", "+00:00")))
    else:
        raise ValueError(f"Unsupported datetime value: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _normalize_fraction(value: str) -> str:
    # PostgREST trims trailing zeros; Python 3.10 only accepts 3 or 6 digits.
    return _FRACTION.sub(lambda match: "." + match.group(1)[:6].ljust(6, "0"), value)


def _optional_datetime(value: Any) -> Optional[datetime]:
    return parse_datetime(value) if value else None


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True, slots=True)
class Countdown:
    days: int
    hours: int
    minutes: int
    seconds: int
    is_past: bool

    @property
    def total_seconds(self) -> int:
        return ((self.days * 24 + self.hours) * 60 + self.minutes) * 60 + self.seconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": self.days,
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "is_past": self.is_past,
        }


def countdown_to(target: datetime, now: Optional[datetime] = None) -> Countdown:
    """Break the time left until ``target`` into days, hours, minutes and seconds."""

    reference = now or datetime.now(timezone.utc)
    difference = int((parse_datetime(target) - parse_datetime(reference)).total_seconds())
    if difference <= 0:
        return Countdown(days=0, hours=0, minutes=0, seconds=0, is_past=True)
    days, rest = divmod(difference, 86_400)
    hours, rest = divmod(rest, 3_600)
    minutes, seconds = divmod(rest, 60)
    return Countdown(days=days, hours=hours, minutes=minutes, seconds=seconds, is_past=False)


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool = False
    subject: str = ""
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Task":
        return cls(
            id=int(record["id"]),
            text=str(record["text"]),
            completed=bool(record.get("completed", False)),
            subject=record.get("subject") or "",
            created_at=_optional_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {"text": self.text, "completed": self.completed, "subject": self.subject}


@dataclass(slots=True)
class Exam:
    id: int
    name: str
    date: datetime
    start_date: datetime
    progress: int = 0
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Exam":
        return cls(
            id=int(record["id"]),
            name=str(record["name"]),
            date=parse_datetime(record["date"]),
            start_date=parse_datetime(record["start_date"]),
            progress=int(record.get("progress") or 0),
            created_at=_optional_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "date": self.date.isoformat(),
            "start_date": self.start_date.isoformat(),
            "progress": self.progress,
        }

    def countdown(self, now: Optional[datetime] = None) -> Countdown:
        return countdown_to(self.date, now)


@dataclass(slots=True)
class Subject:
    id: int
    name: str
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Subject":
        return cls(
            id=int(record["id"]),
            name=str(record["name"]),
            created_at=_optional_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {"name": self.name}

    @property
    def note_key(self) -> str:
        return str(self.id)


@dataclass(slots=True)
class Problem:
    id: int
    question: str
    subject: str
    topic: str
    status: ProblemStatus = ProblemStatus.UNSOLVED
    is_bookmarked: bool = False
    user_solution: Optional[str] = None
    ai_solution: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Problem":
        return cls(
            id=int(record["id"]),
            question=str(record["question"]),
            subject=record.get("subject") or "",
            topic=record.get("topic") or "",
            status=ProblemStatus(record.get("status") or ProblemStatus.UNSOLVED),
            is_bookmarked=bool(record.get("is_bookmarked", False)),
            user_solution=record.get("user_solution"),
            ai_solution=record.get("ai_solution"),
            created_at=_optional_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            "question": self.question,
            "subject": self.subject,
            "topic": self.topic,
            "status": self.status.value,
            "is_bookmarked": self.is_bookmarked,
            "user_solution": self.user_solution,
            "ai_solution": self.ai_solution,
        }


@dataclass(slots=True)
class Amendment:
    id: int
    subject: str
    topic: str
    summary: Dict[str, List[str]] = field(default_factory=lambda: {"points": []})
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Amendment":
        summary = record.get("summary") or {}
        return cls(
            id=int(record["id"]),
            subject=record.get("subject") or "",
            topic=record.get("topic") or "",
            summary={"points": [str(point) for point in summary.get("points") or []]},
            created_at=_optional_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {"subject": self.subject, "topic": self.topic, "summary": {"points": list(self.points)}}

    @property
    def points(self) -> List[str]:
        return self.summary.get("points", [])


@dataclass(frozen=True, slots=True)
class ChallengeResult:
    """One completed daily challenge attempt. Never edited after creation."""

    id: int
    score: int
    total_questions: int
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ChallengeResult":
        return cls(
            id=int(record["id"]),
            score=int(record["score"]),
            total_questions=int(record["total_questions"]),
            created_at=_optional_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {"score": self.score, "total_questions": self.total_questions}

    @property
    def percentage(self) -> float:
        return (self.score / self.total_questions) * 100 if self.total_questions else 0.0


@dataclass(slots=True)
class Profile:
    id: int
    username: str = ""
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Profile":
        return cls(
            id=int(record["id"]),
            username=record.get("username") or "",
            avatar_url=record.get("avatar_url"),
            created_at=_optional_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {"username": self.username, "avatar_url": self.avatar_url}


@dataclass(slots=True)
class Doubt:
    id: int
    question: str
    answer: str
    type: DoubtType = DoubtType.TEXT
    created_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Doubt":
        return cls(
            id=int(record["id"]),
            question=str(record["question"]),
            answer=str(record.get("answer") or ""),
            type=DoubtType(record.get("type") or DoubtType.TEXT),
            created_at=_optional_datetime(record.get("created_at")),
        )

    def to_record(self) -> Dict[str, Any]:
        return {"question": self.question, "answer": self.answer, "type": self.type.value}


def to_payload(entity: Any) -> Dict[str, Any]:
    """Full JSON-ready representation including server-assigned fields."""

    payload = {"id": entity.id, **entity.to_record()}
    payload["created_at"] = _iso(entity.created_at)
    return payload
