"""Domain models for the study dashboard."""

from __future__ import annotations

from .enums import DoubtType, ProblemStatus, TimerMode, UpdatePolicy
from .models import (
    Amendment,
    ChallengeResult,
    Countdown,
    Doubt,
    Exam,
    Problem,
    Profile,
    Subject,
    Task,
    countdown_to,
)

__all__ = [
    "Amendment",
    "ChallengeResult",
    "Countdown",
    "Doubt",
    "DoubtType",
    "Exam",
    "Problem",
    "ProblemStatus",
    "Profile",
    "Subject",
    "Task",
    "TimerMode",
    "UpdatePolicy",
    "countdown_to",
]
