"""Public API surface for the HTTP server, the MCP server and the CLI."""

from __future__ import annotations

from .registry import ApiFunction, call_api, get_api_functions, register_api
from .state import ApiState, get_api_state, set_api_state

# Import endpoint modules so decorators run at module import time.
from . import endpoints, meta, study, timer  # noqa: F401

__all__ = [
    "ApiFunction",
    "ApiState",
    "call_api",
    "get_api_functions",
    "get_api_state",
    "register_api",
    "set_api_state",
]
