from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Type, TypeVar

from ..config import AppSettings, get_settings
from ..core import Notifier, PomodoroTimer
from ..data import BlobStore, PersistenceBackend, SupabaseCollection, SupabaseGateway
from ..domain import Amendment, ChallengeResult, Doubt, Exam, Problem, Profile, Subject, Task
from ..llm import TutorClient
from ..sync import SyncedCollection

T = TypeVar("T")

BackendFactory = Callable[[str], PersistenceBackend]
BlobFactory = Callable[[str], BlobStore]


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, collections, storage and the tutor."""

    settings: AppSettings = field(default_factory=get_settings)
    backend_factory: Optional[BackendFactory] = None
    blob_factory: Optional[BlobFactory] = None
    tutor: Optional[TutorClient] = None
    notifier: Optional[Notifier] = None
    gateway: SupabaseGateway = field(init=False)
    tasks: SyncedCollection[Task] = field(init=False)
    exams: SyncedCollection[Exam] = field(init=False)
    doubts: SyncedCollection[Doubt] = field(init=False)
    subjects: SyncedCollection[Subject] = field(init=False)
    problems: SyncedCollection[Problem] = field(init=False)
    amendments: SyncedCollection[Amendment] = field(init=False)
    challenge_history: SyncedCollection[ChallengeResult] = field(init=False)
    profiles: SyncedCollection[Profile] = field(init=False)
    notes: BlobStore = field(init=False)
    avatars: BlobStore = field(init=False)
    timer: PomodoroTimer = field(init=False)

    def __post_init__(self) -> None:
        self.gateway = SupabaseGateway(self.settings.supabase)
        storage = self.settings.storage

        self.tasks = self._collection(Task, storage.tasks_table)
        self.exams = self._collection(Exam, storage.exams_table)
        self.doubts = self._collection(Doubt, storage.doubts_table)
        self.subjects = self._collection(Subject, storage.subjects_table)
        self.problems = self._collection(Problem, storage.problems_table)
        self.amendments = self._collection(Amendment, storage.amendments_table)
        self.challenge_history = self._collection(ChallengeResult, storage.challenge_history_table)
        self.profiles = self._collection(Profile, storage.profiles_table)

        self.notes = self._bucket(storage.notes_bucket)
        self.avatars = self._bucket(storage.avatars_bucket)

        if self.tutor is None:
            self.tutor = TutorClient(self.settings.llm)
        self.timer = PomodoroTimer(
            self.settings.timer.work_seconds,
            self.settings.timer.break_seconds,
            notifier=self.notifier,
        )

    def _collection(self, entity_type: Type[T], table_name: str) -> SyncedCollection[T]:
        if self.backend_factory is not None:
            backend = self.backend_factory(table_name)
        else:
            backend = SupabaseCollection(gateway=self.gateway, table_name=table_name)
        return SyncedCollection(entity_type, backend, self.settings.sync.update_policy)

    def _bucket(self, name: str) -> BlobStore:
        if self.blob_factory is not None:
            return self.blob_factory(name)
        return BlobStore(gateway=self.gateway, bucket=name)
