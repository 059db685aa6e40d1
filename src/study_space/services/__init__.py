"""Application services orchestrating data access and domain logic."""

from __future__ import annotations

from .amendments import AmendmentService
from .analytics import AnalyticsService
from .challenges import ChallengeService
from .context import ServiceContext
from .dashboard import DashboardService
from .doubts import DoubtService, recent_doubts
from .exams import ExamService
from .notes import NoteService
from .problems import ProblemService
from .profile import ProfileService
from .subjects import SubjectService
from .tasks import TaskService

__all__ = [
    "AmendmentService",
    "AnalyticsService",
    "ChallengeService",
    "DashboardService",
    "DoubtService",
    "ExamService",
    "NoteService",
    "ProblemService",
    "ProfileService",
    "ServiceContext",
    "SubjectService",
    "TaskService",
    "recent_doubts",
]
