from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional

from ..domain import Doubt, DoubtType
from .context import ServiceContext

DIARY_WINDOW = timedelta(hours=24)


def is_recent(doubt: Doubt, now: Optional[datetime] = None, *, window: timedelta = DIARY_WINDOW) -> bool:
    if doubt.created_at is None:
        return False
    reference = now or datetime.now(timezone.utc)
    return doubt.created_at > reference - window


def recent_doubts(doubts: Iterable[Doubt], now: Optional[datetime] = None) -> list[Doubt]:
    """Doubts asked within the last 24 hours, in their original order."""

    reference = now or datetime.now(timezone.utc)
    return [doubt for doubt in doubts if is_recent(doubt, reference)]


@dataclass(slots=True)
class DoubtService:
    context: ServiceContext

    def ask(self, question: str) -> Doubt:
        if not question.strip():
            raise ValueError("Question must not be empty.")
        answer = self.context.tutor.ask(question.strip())
        return self.context.doubts.create(question=question.strip(), answer=answer, type=DoubtType.TEXT)

    def chat(self, message: str) -> str:
        """Free-form tutor reply that is not recorded in the diary."""

        if not message.strip():
            raise ValueError("Message must not be empty.")
        return self.context.tutor.ask(message.strip())

    def diary(self, now: Optional[datetime] = None) -> list[Doubt]:
        return recent_doubts(self.context.doubts, now)
