from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..services import (
    AmendmentService,
    AnalyticsService,
    ChallengeService,
    DashboardService,
    DoubtService,
    ExamService,
    NoteService,
    ProblemService,
    ProfileService,
    ServiceContext,
    SubjectService,
    TaskService,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    loaded: bool = False
    dashboard: DashboardService = field(init=False)
    tasks: TaskService = field(init=False)
    exams: ExamService = field(init=False)
    subjects: SubjectService = field(init=False)
    notes: NoteService = field(init=False)
    problems: ProblemService = field(init=False)
    doubts: DoubtService = field(init=False)
    challenges: ChallengeService = field(init=False)
    amendments: AmendmentService = field(init=False)
    profile: ProfileService = field(init=False)
    analytics: AnalyticsService = field(init=False)

    def __post_init__(self) -> None:
        self.dashboard = DashboardService(self.context)
        self.tasks = TaskService(self.context)
        self.exams = ExamService(self.context)
        self.subjects = SubjectService(self.context)
        self.notes = NoteService(self.context)
        self.problems = ProblemService(self.context)
        self.doubts = DoubtService(self.context)
        self.challenges = ChallengeService(self.context)
        self.amendments = AmendmentService(self.context)
        self.profile = ProfileService(self.context)
        self.analytics = AnalyticsService(self.context)

    def ensure_loaded(self) -> None:
        if self.loaded:
            return
        self.dashboard.load_all()
        self.loaded = True

    def reload(self) -> dict:
        counts = self.dashboard.load_all()
        self.loaded = True
        return counts


api_state = ApiState()


def set_api_state(state: ApiState) -> ApiState:
    """Swap the module-level state, e.g. to point the API at another context."""

    global api_state
    api_state = state
    return state


def get_api_state() -> ApiState:
    return api_state
