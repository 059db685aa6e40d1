from __future__ import annotations

from dataclasses import dataclass

from ..core import PerformanceSummary, performance_summary
from .context import ServiceContext

NOT_ENOUGH_DATA = (
    "There's not enough data yet to provide insights. "
    "Try solving some problems or completing a daily challenge first!"
)


@dataclass(slots=True)
class AnalyticsService:
    context: ServiceContext

    def summary(self) -> PerformanceSummary:
        return performance_summary(self.context.problems, self.context.challenge_history)

    def insights(self) -> str:
        summary = self.summary()
        if not summary.has_data:
            return NOT_ENOUGH_DATA
        return self.context.tutor.performance_insights(summary.to_stats())
