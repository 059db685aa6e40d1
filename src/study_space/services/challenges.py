from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..core import ChallengeSession
from ..domain import ChallengeResult
from ..llm import Quiz
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ChallengeService:
    context: ServiceContext
    session: Optional[ChallengeSession] = field(default=None)

    def generate(self) -> Quiz:
        quiz = self.context.tutor.generate_quiz()
        self.session = ChallengeSession(quiz)
        logger.info("Generated daily challenge '%s' with %d questions", quiz.title, len(quiz.questions))
        return quiz

    def record(self, score: int, total_questions: int) -> ChallengeResult:
        if total_questions <= 0 or not 0 <= score <= total_questions:
            raise ValueError("Score must be between 0 and the number of questions.")
        return self.context.challenge_history.create(score=score, total_questions=total_questions)

    def record_session(self) -> ChallengeResult:
        if self.session is None:
            raise RuntimeError("No daily challenge is in progress.")
        self.session.finish()
        result = self.record(self.session.score, self.session.total_questions)
        self.session = None
        return result

    @property
    def history(self) -> list[ChallengeResult]:
        return self.context.challenge_history.items
