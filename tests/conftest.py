"""Shared fixtures: in-memory stand-ins for Supabase tables, storage buckets and the AI tutor."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

os.environ.setdefault("STUDY_DATA_DIR", tempfile.mkdtemp(prefix="study-space-tests-"))

from study_space.config import (  # noqa: E402
    AppSettings,
    LlmSettings,
    StorageSettings,
    SupabaseSettings,
    SyncSettings,
    TimerSettings,
)
from study_space.domain import UpdatePolicy  # noqa: E402
from study_space.errors import BlobNotFoundError  # noqa: E402
from study_space.llm import AmendmentSummary, Quiz  # noqa: E402
from study_space.services import ServiceContext  # noqa: E402


class FakeBackend:
    """Dict-backed table that assigns ids and ``created_at`` like Postgres would."""

    def __init__(self, table_name: str, rows: Optional[List[Dict[str, Any]]] = None) -> None:
        self.table_name = table_name
        self.rows: List[Dict[str, Any]] = [dict(row) for row in rows or []]
        self.next_id = max((row["id"] for row in self.rows), default=0) + 1
        self.calls: List[tuple] = []
        self.fail_with: Optional[Exception] = None
        self.silent_ids: set = set()

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def list(self, order_field: Optional[str] = None, descending: bool = False) -> List[Dict[str, Any]]:
        self.calls.append(("list", order_field, descending))
        self._maybe_fail()
        rows = [dict(row) for row in self.rows]
        if order_field:
            rows.sort(key=lambda row: row[order_field], reverse=descending)
        return rows

    def insert(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        self.calls.append(("insert", dict(fields)))
        self._maybe_fail()
        row = {**fields, "id": self.next_id, "created_at": datetime.now(timezone.utc).isoformat()}
        self.next_id += 1
        self.rows.append(row)
        return dict(row)

    def update(self, record_id: int, fields: Dict[str, Any]) -> int:
        self.calls.append(("update", record_id, dict(fields)))
        self._maybe_fail()
        if record_id in self.silent_ids:
            return 0
        for row in self.rows:
            if row["id"] == record_id:
                row.update(fields)
                return 1
        return 0

    def delete(self, record_id: int) -> int:
        self.calls.append(("delete", record_id))
        self._maybe_fail()
        if record_id in self.silent_ids:
            return 0
        before = len(self.rows)
        self.rows = [row for row in self.rows if row["id"] != record_id]
        return before - len(self.rows)


class FakeBlobStore:
    def __init__(self, bucket: str) -> None:
        self.bucket = bucket
        self.blobs: Dict[str, bytes] = {}
        self.uploads: List[Dict[str, Any]] = []

    def download(self, key: str) -> bytes:
        if key not in self.blobs:
            raise BlobNotFoundError(f"'{key}' does not exist in bucket '{self.bucket}'.")
        return self.blobs[key]

    def upload(self, key: str, data: bytes, *, overwrite: bool = True, no_cache: bool = True, content_type: str = "") -> None:
        self.uploads.append({"key": key, "overwrite": overwrite, "no_cache": no_cache, "content_type": content_type})
        self.blobs[key] = data

    def public_url(self, key: str) -> str:
        return f"https://storage.test/{self.bucket}/{key}"

    def remove(self, key: str) -> None:
        if key not in self.blobs:
            raise BlobNotFoundError(key)
        del self.blobs[key]


QUIZ_PAYLOAD = {
    "title": "Daily Law Mix",
    "questions": [
        {
            "subject": "Contracts",
            "topic": "Offer",
            "questionText": "Which is an invitation to treat?",
            "options": {"A": "Shop display", "B": "Tender", "C": "Auction bid", "D": "Acceptance"},
            "correctOption": "A",
            "detailedExplanation": "Goods on display invite offers.",
        },
        {
            "subject": "Torts",
            "topic": "Negligence",
            "questionText": "Which case set the neighbour principle?",
            "options": {"A": "Carlill", "B": "Donoghue v Stevenson", "C": "Hadley", "D": "Rylands"},
            "correctOption": "b",
            "detailedExplanation": "Lord Atkin's neighbour principle.",
        },
    ],
}


def make_tutor() -> MagicMock:
    tutor = MagicMock(name="TutorClient")
    tutor.ask.return_value = "Consideration is something of value exchanged."
    tutor.solve_problem.return_value = "Step 1: identify the offer."
    tutor.generate_quiz.return_value = Quiz.model_validate(QUIZ_PAYLOAD)
    tutor.summarize_amendments.return_value = AmendmentSummary(points=["Section 2 amended", "New proviso added"])
    tutor.section_summary.return_value = "Section 420 covers cheating."
    tutor.performance_insights.return_value = "Focus on torts."
    tutor.balance_equation.return_value = "2H2 + O2 -> 2H2O"
    return tutor


def make_settings(policy: UpdatePolicy = UpdatePolicy.OPTIMISTIC) -> AppSettings:
    return AppSettings(
        llm=LlmSettings(api_key="sk-test", model="gpt-4o-mini", base_url=None, timeout_seconds=5.0),
        supabase=SupabaseSettings(url="https://example.supabase.co", anon_key="anon", timeout_seconds=5),
        storage=StorageSettings(),
        timer=TimerSettings(),
        sync=SyncSettings(update_policy=policy),
    )


class FakeWorld:
    """A service context plus handles on the fakes behind it."""

    def __init__(
        self,
        seed: Optional[Dict[str, List[Dict[str, Any]]]] = None,
        policy: UpdatePolicy = UpdatePolicy.OPTIMISTIC,
        notifier: Any = None,
    ) -> None:
        self.seed = seed or {}
        self.backends: Dict[str, FakeBackend] = {}
        self.buckets: Dict[str, FakeBlobStore] = {}
        self.tutor = make_tutor()
        self.context = ServiceContext(
            settings=make_settings(policy),
            backend_factory=self._backend,
            blob_factory=self._bucket,
            tutor=self.tutor,
            notifier=notifier,
        )

    def _backend(self, table_name: str) -> FakeBackend:
        backend = FakeBackend(table_name, self.seed.get(table_name))
        self.backends[table_name] = backend
        return backend

    def _bucket(self, name: str) -> FakeBlobStore:
        store = FakeBlobStore(name)
        self.buckets[name] = store
        return store


@pytest.fixture
def world() -> FakeWorld:
    return FakeWorld(
        seed={
            "profiles": [{"id": 1, "username": "asha", "avatar_url": None, "created_at": "2024-01-01T00:00:00+00:00"}],
        }
    )
