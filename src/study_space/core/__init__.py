"""Timers and study statistics that need no remote service."""

from .analytics import PerformanceSummary, performance_summary
from .challenge import QUIZ_DURATION_SECONDS, ChallengeSession
from .timer import BellNotifier, Notifier, NullNotifier, PomodoroTimer, run_timer

__all__ = [
    "BellNotifier",
    "ChallengeSession",
    "Notifier",
    "NullNotifier",
    "PerformanceSummary",
    "PomodoroTimer",
    "QUIZ_DURATION_SECONDS",
    "performance_summary",
    "run_timer",
]
