"""
Tool call dispatch

Routes a tool call to its handler and turns every outcome, failures
included, into a ToolResult so nothing surfaces as a protocol-level fault.
"""

import logging
from typing import Any, Dict, List, Optional

from mcp import types

from perplexica_mcp.config import PerplexicaSettings

from .result import ToolResult
from .tools_impl import TOOLS
from .tools_impl.perplexica_ask import InvalidInputError, PerplexicaError

logger = logging.getLogger(__name__)


def list_tool_descriptors() -> List[types.Tool]:
    return [
        types.Tool(
            name=tool["name"],
            description=tool["description"],
            inputSchema=tool["parameters_schema"],
        )
        for tool in TOOLS.values()
    ]


async def dispatch_tool_call(
    name: str,
    arguments: Optional[Dict[str, Any]],
    *,
    settings: Optional[PerplexicaSettings] = None,
) -> ToolResult:
    tool = TOOLS.get(name)
    if tool is None:
        logger.warning("Unknown tool requested: %s", name)
        return ToolResult.error(f"Unknown tool: {name}")

    try:
        if arguments is None:
            raise InvalidInputError("No arguments provided")
        text = await tool["handler"](arguments, settings=settings)
    except PerplexicaError as exc:
        logger.info("Tool %s failed [%s]: %s", name, exc.code, exc.message)
        return ToolResult.error(f"Error: {exc.message}")
    except Exception as exc:
        logger.exception("Unexpected failure in tool %s", name)
        return ToolResult.error(f"Error: {exc}")

    return ToolResult.ok(text)
