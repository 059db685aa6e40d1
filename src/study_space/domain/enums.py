from __future__ import annotations

from enum import Enum


class ProblemStatus(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNSOLVED = "unsolved"


class DoubtType(str, Enum):
    TEXT = "text"


class TimerMode(str, Enum):
    WORK = "work"
    BREAK = "break"

    @property
    def other(self) -> "TimerMode":
        return TimerMode.BREAK if self is TimerMode.WORK else TimerMode.WORK


class UpdatePolicy(str, Enum):
    """What to do when an update by id reports zero affected rows."""

    OPTIMISTIC = "optimistic"
    STRICT = "strict"
