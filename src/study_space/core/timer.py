from __future__ import annotations

import logging
import math
import sys
import time
from typing import Any, Callable, Dict, Optional, Protocol

from ..domain import TimerMode

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class Notifier(Protocol):
    def notify(self, finished: TimerMode) -> None: ...


class NullNotifier:
    def notify(self, finished: TimerMode) -> None:
        return None


class BellNotifier:
    """Rings the terminal bell when an interval completes."""

    def __init__(self, stream: Any = None) -> None:
        self._stream = stream

    def notify(self, finished: TimerMode) -> None:
        stream = self._stream or sys.stdout
        stream.write("\a")
        stream.flush()


class PomodoroTimer:
    """Work/break countdown that derives the remaining time from a fixed deadline.

    While running, ``remaining`` is recomputed on every :meth:`tick` as the
    whole seconds left until ``target`` (halves round up) instead of being
    decremented, so late or skipped ticks never accumulate into drift.
    """

    def __init__(
        self,
        work_seconds: int = 25 * 60,
        break_seconds: int = 5 * 60,
        *,
        clock: Clock = time.time,
        notifier: Optional[Notifier] = None,
    ) -> None:
        _check_duration(work_seconds, break_seconds)
        self.work_seconds = work_seconds
        self.break_seconds = break_seconds
        self.mode = TimerMode.WORK
        self.remaining = work_seconds
        self.running = False
        self.target: Optional[float] = None
        self._clock = clock
        self._notifier: Notifier = notifier or NullNotifier()

    def duration_for(self, mode: TimerMode) -> int:
        return self.work_seconds if mode is TimerMode.WORK else self.break_seconds

    def start(self) -> None:
        if self.running:
            return
        self.target = self._clock() + self.remaining
        self.running = True
        logger.debug("Timer started in %s mode with %ss remaining", self.mode.value, self.remaining)

    def tick(self) -> bool:
        """Refresh ``remaining`` from the deadline. Returns True if the interval expired."""

        if not self.running or self.target is None:
            return False
        remaining = round_half_up(self.target - self._clock())
        if remaining > 0:
            self.remaining = remaining
            return False
        self._expire()
        return True

    def pause(self) -> None:
        if not self.running:
            return
        self.running = False
        self.target = None
        logger.debug("Timer paused with %ss remaining", self.remaining)

    def reset(self) -> None:
        self.running = False
        self.target = None
        self.mode = TimerMode.WORK
        self.remaining = self.work_seconds

    def reconfigure(self, work_seconds: int, break_seconds: int) -> None:
        _check_duration(work_seconds, break_seconds)
        self.work_seconds = work_seconds
        self.break_seconds = break_seconds
        self.reset()

    @property
    def progress(self) -> float:
        total = self.duration_for(self.mode)
        if total <= 0:
            return 0.0
        return (total - self.remaining) / total * 100

    def format_clock(self) -> str:
        hours, rest = divmod(max(self.remaining, 0), 3600)
        minutes, seconds = divmod(rest, 60)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    def snapshot(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "remaining": self.remaining,
            "clock": self.format_clock(),
            "running": self.running,
            "work_seconds": self.work_seconds,
            "break_seconds": self.break_seconds,
            "progress": round(self.progress, 1),
        }

    def _expire(self) -> None:
        finished = self.mode
        self.running = False
        self.target = None
        self.mode = finished.other
        self.remaining = self.duration_for(self.mode)
        logger.info("%s interval finished; switching to %s", finished.value, self.mode.value)
        try:
            self._notifier.notify(finished)
        except Exception:  # noqa: BLE001
            logger.warning("Timer completion cue failed", exc_info=True)


def run_timer(
    timer: PomodoroTimer,
    *,
    interval: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
    on_tick: Optional[Callable[[PomodoroTimer], None]] = None,
) -> bool:
    """Drive ``timer`` until the current interval expires. Returns True on expiry."""

    timer.start()
    while timer.running:
        sleep(interval)
        expired = timer.tick()
        if on_tick is not None:
            on_tick(timer)
        if expired:
            return True
    return False


def round_half_up(seconds: float) -> int:
    return math.floor(seconds + 0.5)


def _check_duration(work_seconds: int, break_seconds: int) -> None:
    if work_seconds < 0 or break_seconds < 0:
        raise ValueError("Timer durations must not be negative.")
