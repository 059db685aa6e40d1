"""Tests for the drift-corrected pomodoro timer."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from study_space.core import PomodoroTimer, run_timer
from study_space.domain import TimerMode


class FakeClock:
    def __init__(self, now: float = 1_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


class TestPomodoroTimer:
    def test_tick_reports_remaining_from_deadline(self, clock):
        notifier = MagicMock()
        timer = PomodoroTimer(25 * 60, 5 * 60, clock=clock, notifier=notifier)
        timer.remaining = 125
        timer.start()

        clock.advance(124)
        assert timer.tick() is False
        assert timer.remaining == 1

        clock.advance(2)
        assert timer.tick() is True
        assert timer.mode is TimerMode.BREAK
        assert timer.remaining == 5 * 60
        assert timer.running is False

        assert timer.tick() is False
        notifier.notify.assert_called_once_with(TimerMode.WORK)

    def test_late_ticks_do_not_drift(self, clock):
        timer = PomodoroTimer(60, 30, clock=clock)
        timer.start()
        clock.advance(10.4)
        timer.tick()
        clock.advance(29.9)
        timer.tick()
        assert timer.remaining == 20

    def test_half_seconds_round_up(self, clock):
        notifier = MagicMock()
        timer = PomodoroTimer(3, 2, clock=clock, notifier=notifier)
        timer.start()
        clock.advance(0.5)
        timer.tick()
        assert timer.remaining == 3

        clock.advance(2.0)
        assert timer.tick() is False
        assert timer.remaining == 1
        notifier.notify.assert_not_called()

        clock.advance(0.5)
        assert timer.tick() is True

    def test_pause_does_not_leak_idle_time(self, clock):
        timer = PomodoroTimer(100, 30, clock=clock)
        timer.start()
        clock.advance(10)
        timer.tick()
        assert timer.remaining == 90
        timer.pause()

        clock.advance(3_600)
        assert timer.tick() is False
        assert timer.remaining == 90

        timer.start()
        clock.advance(1)
        timer.tick()
        assert timer.remaining == 89

    def test_start_while_running_keeps_deadline(self, clock):
        timer = PomodoroTimer(100, 30, clock=clock)
        timer.start()
        target = timer.target
        clock.advance(5)
        timer.start()
        assert timer.target == target

    def test_break_expiry_returns_to_work(self, clock):
        timer = PomodoroTimer(10, 5, clock=clock)
        timer.start()
        clock.advance(10)
        timer.tick()
        timer.start()
        clock.advance(5)
        assert timer.tick() is True
        assert timer.mode is TimerMode.WORK
        assert timer.remaining == 10

    def test_reset(self, clock):
        timer = PomodoroTimer(10, 5, clock=clock)
        timer.start()
        clock.advance(10)
        timer.tick()
        timer.reset()
        assert timer.mode is TimerMode.WORK
        assert timer.remaining == 10
        assert timer.running is False

    def test_reconfigure_resets(self, clock):
        timer = PomodoroTimer(10, 5, clock=clock)
        timer.start()
        timer.reconfigure(50 * 60, 10 * 60)
        assert timer.remaining == 50 * 60
        assert timer.break_seconds == 10 * 60
        assert timer.running is False

    def test_negative_durations_rejected(self, clock):
        with pytest.raises(ValueError):
            PomodoroTimer(-1, 5, clock=clock)
        timer = PomodoroTimer(10, 5, clock=clock)
        with pytest.raises(ValueError):
            timer.reconfigure(10, -5)

    def test_notifier_failure_is_swallowed(self, clock):
        notifier = MagicMock()
        notifier.notify.side_effect = OSError("no audio device")
        timer = PomodoroTimer(3, 2, clock=clock, notifier=notifier)
        timer.start()
        clock.advance(3)
        assert timer.tick() is True
        assert timer.mode is TimerMode.BREAK

    def test_format_clock_and_snapshot(self, clock):
        timer = PomodoroTimer(3_725, 60, clock=clock)
        assert timer.format_clock() == "01:02:05"
        snapshot = timer.snapshot()
        assert snapshot["mode"] == "work"
        assert snapshot["remaining"] == 3_725
        assert snapshot["progress"] == 0.0


class TestRunTimer:
    def test_runs_until_expiry(self, clock):
        timer = PomodoroTimer(3, 2, clock=clock)
        seen = []
        expired = run_timer(timer, interval=1.0, sleep=clock.advance, on_tick=lambda t: seen.append(t.remaining))
        assert expired is True
        assert seen == [2, 1, 2]
        assert timer.mode is TimerMode.BREAK
