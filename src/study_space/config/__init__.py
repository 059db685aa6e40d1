"""Configuration models and helpers."""

from __future__ import annotations

from .paths import APP_NAME, DATA_DIR, ensure_data_dir
from .settings import (
    AppSettings,
    LlmSettings,
    StorageSettings,
    SupabaseSettings,
    SyncSettings,
    TimerSettings,
    get_settings,
)

__all__ = [
    "APP_NAME",
    "AppSettings",
    "DATA_DIR",
    "LlmSettings",
    "StorageSettings",
    "SupabaseSettings",
    "SyncSettings",
    "TimerSettings",
    "ensure_data_dir",
    "get_settings",
]
