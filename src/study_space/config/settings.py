from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from ..domain.enums import UpdatePolicy

load_dotenv()


@dataclass(frozen=True)
class LlmSettings:
    api_key: Optional[str]
    model: str
    base_url: Optional[str]
    timeout_seconds: float

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.model)

    @property
    def missing_env_vars(self) -> list[str]:
        missing = []
        if not self.api_key:
            missing.append("OPENAI_API_KEY")
        if not self.model:
            missing.append("OPENAI_MODEL")
        return missing


@dataclass(frozen=True)
class SupabaseSettings:
    url: Optional[str]
    anon_key: Optional[str]
    timeout_seconds: int

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.anon_key)


@dataclass(frozen=True)
class StorageSettings:
    tasks_table: str = "tasks"
    exams_table: str = "exams"
    doubts_table: str = "doubts"
    subjects_table: str = "subjects"
    problems_table: str = "problems"
    amendments_table: str = "amendments"
    challenge_history_table: str = "daily_challenge_history"
    profiles_table: str = "profiles"
    notes_bucket: str = "notes"
    avatars_bucket: str = "avatars"


@dataclass(frozen=True)
class TimerSettings:
    work_seconds: int = 25 * 60
    break_seconds: int = 5 * 60
    tick_interval: float = 1.0


@dataclass(frozen=True)
class SyncSettings:
    update_policy: UpdatePolicy = UpdatePolicy.OPTIMISTIC


@dataclass(frozen=True)
class AppSettings:
    llm: LlmSettings
    supabase: SupabaseSettings
    storage: StorageSettings
    timer: TimerSettings
    sync: SyncSettings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_from_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _policy_from_env(name: str) -> UpdatePolicy:
    raw = (os.getenv(name) or "").strip().lower()
    try:
        return UpdatePolicy(raw)
    except ValueError:
        return UpdatePolicy.OPTIMISTIC


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    llm = LlmSettings(
        api_key=os.getenv("OPENAI_API_KEY"),
        model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        base_url=os.getenv("OPENAI_BASE_URL"),
        timeout_seconds=_float_from_env("OPENAI_TIMEOUT_SECONDS", 60.0),
    )

    supabase = SupabaseSettings(
        url=os.getenv("SUPABASE_URL"),
        anon_key=os.getenv("SUPABASE_ANON_KEY"),
        timeout_seconds=_int_from_env("SUPABASE_TIMEOUT_SECONDS", 30),
    )

    storage = StorageSettings(
        tasks_table=os.getenv("SUPABASE_TASKS_TABLE", "tasks"),
        exams_table=os.getenv("SUPABASE_EXAMS_TABLE", "exams"),
        doubts_table=os.getenv("SUPABASE_DOUBTS_TABLE", "doubts"),
        subjects_table=os.getenv("SUPABASE_SUBJECTS_TABLE", "subjects"),
        problems_table=os.getenv("SUPABASE_PROBLEMS_TABLE", "problems"),
        amendments_table=os.getenv("SUPABASE_AMENDMENTS_TABLE", "amendments"),
        challenge_history_table=os.getenv("SUPABASE_CHALLENGE_HISTORY_TABLE", "daily_challenge_history"),
        profiles_table=os.getenv("SUPABASE_PROFILES_TABLE", "profiles"),
        notes_bucket=os.getenv("SUPABASE_NOTES_BUCKET", "notes"),
        avatars_bucket=os.getenv("SUPABASE_AVATARS_BUCKET", "avatars"),
    )

    timer = TimerSettings(
        work_seconds=_int_from_env("STUDY_TIMER_WORK_SECONDS", 25 * 60),
        break_seconds=_int_from_env("STUDY_TIMER_BREAK_SECONDS", 5 * 60),
        tick_interval=_float_from_env("STUDY_TIMER_TICK_SECONDS", 1.0),
    )

    sync = SyncSettings(update_policy=_policy_from_env("STUDY_UPDATE_POLICY"))

    return AppSettings(llm=llm, supabase=supabase, storage=storage, timer=timer, sync=sync)
