from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..domain import Problem, ProblemStatus
from ..errors import RecordNotFoundError
from .context import ServiceContext

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProblemService:
    context: ServiceContext

    def list_problems(self, *, bookmarked_only: bool = False) -> list[Problem]:
        problems = self.context.problems.items
        if bookmarked_only:
            return [problem for problem in problems if problem.is_bookmarked]
        return problems

    def get(self, problem_id: int) -> Problem:
        problem = self.context.problems.get(problem_id)
        if problem is None:
            raise RecordNotFoundError(f"Problem {problem_id} not found.")
        return problem

    def add(self, question: str, subject: str, topic: str) -> Problem:
        if not question.strip():
            raise ValueError("Problem question must not be empty.")
        return self.context.problems.create(
            question=question.strip(),
            subject=subject,
            topic=topic,
            status=ProblemStatus.UNSOLVED,
            is_bookmarked=False,
            user_solution=None,
            ai_solution=None,
        )

    def update(self, problem_id: int, **changes: Any) -> Problem | None:
        if "status" in changes:
            changes["status"] = ProblemStatus(changes["status"])
        return self.context.problems.update(problem_id, **changes)

    def set_status(self, problem_id: int, status: str | ProblemStatus) -> Problem | None:
        return self.update(problem_id, status=ProblemStatus(status))

    def toggle_bookmark(self, problem_id: int) -> Problem | None:
        problem = self.get(problem_id)
        return self.update(problem_id, is_bookmarked=not problem.is_bookmarked)

    def save_user_solution(self, problem_id: int, solution: str) -> Problem | None:
        return self.update(problem_id, user_solution=solution)

    def request_ai_solution(self, problem_id: int) -> str:
        """Return the stored AI solution, generating and saving one on first request."""

        problem = self.get(problem_id)
        if problem.ai_solution:
            return problem.ai_solution
        solution = self.context.tutor.solve_problem(problem.question)
        self.update(problem_id, ai_solution=solution)
        logger.info("Stored AI solution for problem %s", problem_id)
        return solution

    def delete(self, problem_id: int) -> None:
        self.context.problems.delete(problem_id)
