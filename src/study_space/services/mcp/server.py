from __future__ import annotations

import logging

from fastmcp import FastMCP

from ...api import get_api_functions
from ...logging import configure_logging

INSTRUCTIONS = (
    "Study Space MCP server exposes a student's dashboard: tasks, exam countdowns, subject notes, "
    "tracked problems, the AI tutor, daily challenges and the pomodoro timer."
)

configure_logging()
logger = logging.getLogger(__name__)

server = FastMCP(name="study-space", instructions=INSTRUCTIONS)

for api_function in get_api_functions():
    logger.debug("Registering MCP tool: %s", api_function.name)
    server.tool(
        api_function.func,
        name=api_function.name,
        description=api_function.description,
        tags={api_function.category},
    )


def run_mcp_server(host: str = "127.0.0.1", port: int = 8765) -> None:
    import asyncio

    logger.info("Serving Study Space MCP tools on %s:%s", host, port)
    asyncio.run(server.run_streamable_http_async(host=host, port=port))
