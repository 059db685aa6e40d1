from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import DATA_DIR, ensure_data_dir


_CONFIGURED = False


def configure_logging(level: Optional[str] = None, *, log_path: Optional[Path] = None) -> None:
    """Send records from every ``study_space`` logger to a rotating log file and stderr.

    Safe to call more than once; only the first call installs handlers.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    ensure_data_dir()
    log_file = log_path or DATA_DIR / "study_space.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(str(log_file), maxBytes=1_000_000, backupCount=5, encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    resolved = (level or os.getenv("STUDY_LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, resolved, logging.INFO))
    root.addHandler(file_handler)
    root.addHandler(console_handler)

    # httpx logs every Supabase request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _CONFIGURED = True
    logging.getLogger(__name__).debug("Writing logs to %s", log_file)


__all__ = ["configure_logging"]
