"""MCP services for Study Space."""

from .server import run_mcp_server, server

__all__ = ["run_mcp_server", "server"]
