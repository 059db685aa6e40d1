from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "Study Space"
APP_AUTHOR = "StudySpace"
DATA_DIR = Path(os.getenv("STUDY_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR))


def ensure_data_dir() -> Path:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    return DATA_DIR
