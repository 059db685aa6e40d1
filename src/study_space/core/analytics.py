from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ..domain import ChallengeResult, Problem, ProblemStatus
from ..llm.schemas import PerformanceStats


@dataclass(frozen=True)
class PerformanceSummary:
    overall_accuracy: float
    total_solved: int
    subject_accuracy: Dict[str, float] = field(default_factory=dict)
    average_score: float = 0.0
    recent_scores: List[int] = field(default_factory=list)
    total_challenges: int = 0

    @property
    def has_data(self) -> bool:
        return self.total_solved > 0 or self.total_challenges > 0

    def to_stats(self) -> PerformanceStats:
        return PerformanceStats(
            overall_accuracy=self.overall_accuracy,
            total_solved=self.total_solved,
            subject_accuracy=self.subject_accuracy,
            average_score_percentage=self.average_score,
            total_challenges=self.total_challenges,
        )

    def to_dict(self) -> dict:
        return {
            "overall_accuracy": round(self.overall_accuracy, 1),
            "total_solved": self.total_solved,
            "subject_accuracy": {name: round(value, 1) for name, value in self.subject_accuracy.items()},
            "average_score": round(self.average_score, 1),
            "recent_scores": list(self.recent_scores),
            "total_challenges": self.total_challenges,
        }


def performance_summary(problems: Iterable[Problem], history: Iterable[ChallengeResult]) -> PerformanceSummary:
    """Accuracy across attempted problems and average daily challenge score.

    ``history`` is expected newest first, as loaded by the dashboard.
    """

    attempted = [problem for problem in problems if problem.status is not ProblemStatus.UNSOLVED]
    correct = sum(1 for problem in attempted if problem.status is ProblemStatus.CORRECT)
    overall = correct / len(attempted) * 100 if attempted else 0.0

    per_subject: Dict[str, List[int]] = {}
    for problem in attempted:
        tally = per_subject.setdefault(problem.subject, [0, 0])
        tally[1] += 1
        if problem.status is ProblemStatus.CORRECT:
            tally[0] += 1
    subject_accuracy = {
        subject: (hits / total * 100 if total else 0.0) for subject, (hits, total) in per_subject.items()
    }

    results = list(history)
    average = sum(result.percentage for result in results) / len(results) if results else 0.0

    return PerformanceSummary(
        overall_accuracy=overall,
        total_solved=len(attempted),
        subject_accuracy=subject_accuracy,
        average_score=average,
        recent_scores=[result.score for result in results[:5]],
        total_challenges=len(results),
    )
