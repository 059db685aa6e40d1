from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from .core import BellNotifier, PomodoroTimer, run_timer
from .errors import StudySpaceError
from .logging import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Study Space command line interface.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    api_parser = subparsers.add_parser("api", help="Start the FastAPI server exposing the dashboard functions.")
    api_parser.add_argument("--host", default="127.0.0.1")
    api_parser.add_argument("--port", type=int, default=8000)

    mcp_parser = subparsers.add_parser("mcp", help="Start the FastMCP server.")
    mcp_parser.add_argument("--host", default="127.0.0.1")
    mcp_parser.add_argument("--port", type=int, default=8765)

    timer_parser = subparsers.add_parser("timer", help="Run pomodoro intervals in the terminal.")
    timer_parser.add_argument("--work", type=int, default=None, help="Work interval in minutes.")
    timer_parser.add_argument("--break", dest="break_", type=int, default=None, help="Break interval in minutes.")
    timer_parser.add_argument("--cycles", type=int, default=1, help="Number of work+break cycles to run.")

    call_parser = subparsers.add_parser("call", help="Invoke one API function and print its JSON result.")
    call_parser.add_argument("name")
    call_parser.add_argument("arguments", nargs="*", metavar="key=value")

    return parser


def parse_arguments(pairs: Sequence[str]) -> Dict[str, Any]:
    """Turn ``key=value`` pairs into keyword arguments; values are JSON when they parse."""

    arguments: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got '{pair}'.")
        try:
            arguments[key] = json.loads(raw)
        except json.JSONDecodeError:
            arguments[key] = raw
    return arguments


def _run_timer(work_minutes: Optional[int], break_minutes: Optional[int], cycles: int) -> None:
    from .config import get_settings

    settings = get_settings().timer
    work_seconds = work_minutes * 60 if work_minutes is not None else settings.work_seconds
    break_seconds = break_minutes * 60 if break_minutes is not None else settings.break_seconds
    timer = PomodoroTimer(work_seconds, break_seconds, notifier=BellNotifier())

    def show(current: PomodoroTimer) -> None:
        sys.stdout.write(f"\r{current.mode.value:>5} {current.format_clock()}")
        sys.stdout.flush()

    try:
        for _ in range(cycles * 2):
            run_timer(timer, interval=settings.tick_interval, on_tick=show)
            sys.stdout.write("\n")
    except KeyboardInterrupt:
        timer.pause()
        sys.stdout.write(f"\nPaused with {timer.format_clock()} left.\n")


def _call(name: str, pairs: List[str]) -> int:
    from .api import call_api

    try:
        result = call_api(name, **parse_arguments(pairs))
    except (StudySpaceError, KeyError, ValueError, TypeError, RuntimeError) as exc:
        logger.debug("CLI call %s failed", name, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(json.dumps(result, indent=2, default=str))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    logger.info("Study Space CLI starting")
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "api":
        from .services.http import run_local_server

        run_local_server(host=args.host, port=args.port)
    elif args.command == "mcp":
        from .services.mcp import run_mcp_server

        run_mcp_server(host=args.host, port=args.port)
    elif args.command == "timer":
        _run_timer(args.work, args.break_, args.cycles)
    elif args.command == "call":
        return _call(args.name, args.arguments)
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
