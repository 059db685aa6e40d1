from __future__ import annotations

from typing import Any, Dict

from .registry import register_api
from .state import get_api_state


def _timer():
    timer = get_api_state().context.timer
    timer.tick()
    return timer


@register_api("timer_status", description="Current pomodoro mode and time left.", category="timer")
def timer_status() -> Dict[str, Any]:
    return _timer().snapshot()


@register_api("timer_start", description="Start or resume the pomodoro timer.", category="timer")
def timer_start() -> Dict[str, Any]:
    timer = _timer()
    timer.start()
    return timer.snapshot()


@register_api("timer_pause", description="Pause the pomodoro timer.", category="timer")
def timer_pause() -> Dict[str, Any]:
    timer = _timer()
    timer.pause()
    return timer.snapshot()


@register_api("timer_reset", description="Reset to a fresh work interval.", category="timer")
def timer_reset() -> Dict[str, Any]:
    timer = _timer()
    timer.reset()
    return timer.snapshot()


@register_api(
    "timer_configure",
    description="Set work and break durations in seconds; resets the timer.",
    category="timer",
)
def timer_configure(work_seconds: int, break_seconds: int) -> Dict[str, Any]:
    timer = _timer()
    timer.reconfigure(work_seconds, break_seconds)
    return timer.snapshot()
