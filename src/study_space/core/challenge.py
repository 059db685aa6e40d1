from __future__ import annotations

import time
from typing import Callable, Dict, List, Optional

from ..llm.schemas import OptionLetter, Quiz
from .timer import round_half_up

QUIZ_DURATION_SECONDS = 30 * 60


class ChallengeSession:
    """One sitting of the daily quiz with a fixed deadline."""

    def __init__(
        self,
        quiz: Quiz,
        *,
        duration_seconds: int = QUIZ_DURATION_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not quiz.questions:
            raise ValueError("The generated quiz has no questions.")
        self.quiz = quiz
        self.duration_seconds = duration_seconds
        self.answers: List[Optional[OptionLetter]] = [None] * len(quiz.questions)
        self.current_index = 0
        self.finished = False
        self._clock = clock
        self._deadline: Optional[float] = None

    @property
    def started(self) -> bool:
        return self._deadline is not None

    def begin(self) -> None:
        if self._deadline is None:
            self._deadline = self._clock() + self.duration_seconds

    def time_left(self) -> int:
        if self._deadline is None:
            return self.duration_seconds
        return max(round_half_up(self._deadline - self._clock()), 0)

    @property
    def expired(self) -> bool:
        return self.started and self.time_left() <= 0

    def answer(self, index: int, letter: str) -> None:
        if self.finished or self.expired:
            self.finished = True
            raise RuntimeError("The challenge is already over.")
        if not 0 <= index < len(self.answers):
            raise IndexError(f"Question {index} does not exist.")
        self.answers[index] = OptionLetter(letter.strip().upper())

    def next_question(self) -> bool:
        """Advance to the next question; finishes the session after the last one."""

        if self.current_index < len(self.answers) - 1:
            self.current_index += 1
            return True
        self.finished = True
        return False

    def finish(self) -> None:
        self.finished = True

    @property
    def score(self) -> int:
        return sum(
            1
            for question, selected in zip(self.quiz.questions, self.answers)
            if selected is not None and selected == question.correct_option
        )

    @property
    def total_questions(self) -> int:
        return len(self.quiz.questions)

    def result(self) -> Dict[str, int]:
        return {"score": self.score, "total_questions": self.total_questions}
