"""
Perplexica Ask MCP server

Registers the toolbox with the MCP low-level server and runs it over stdio.

Usage:
    perplexica-ask-mcp
    python -m perplexica_mcp
"""

import asyncio
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from tool_box import dispatch_tool_call, list_tool_descriptors

from . import __version__
from .config import PerplexicaSettings, get_perplexica_settings

logger = logging.getLogger(__name__)

SERVER_NAME = "perplexica-ask"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_server(settings: Optional[PerplexicaSettings] = None) -> Server:
    """Build the MCP server with list/call handlers bound to ``settings``."""
    settings = settings or get_perplexica_settings()
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return list_tool_descriptors()

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await dispatch_tool_call(
            request.params.name,
            request.params.arguments,
            settings=settings,
        )
        return types.ServerResult(result.to_call_tool_result())

    # Registered directly so the isError flag from dispatch reaches the client as-is
    server.request_handlers[types.CallToolRequest] = call_tool

    return server


async def run_server(settings: PerplexicaSettings) -> None:
    server = create_server(settings)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Perplexica Ask MCP Server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def configure_logging(level: str) -> None:
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def main() -> None:
    load_dotenv()
    settings = get_perplexica_settings()
    configure_logging(settings.log_level)

    if not settings.api_key:
        logger.info("PERPLEXICA_API_KEY not set; requests will be sent unauthenticated")

    try:
        asyncio.run(run_server(settings))
    except Exception:
        logger.exception("Fatal error running server")
        sys.exit(1)


if __name__ == "__main__":
    main()
