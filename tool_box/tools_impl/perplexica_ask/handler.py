from typing import Any, Dict, Optional

from perplexica_mcp.config import PerplexicaSettings

from .client import perform_chat_completion
from .exceptions import InvalidInputError


async def perplexica_ask_handler(
    arguments: Dict[str, Any],
    *,
    settings: Optional[PerplexicaSettings] = None,
) -> str:
    messages = arguments.get("messages")
    if not isinstance(messages, list):
        raise InvalidInputError(
            "Invalid arguments for perplexica-ask: 'messages' must be an array"
        )
    return await perform_chat_completion(messages, settings=settings)
