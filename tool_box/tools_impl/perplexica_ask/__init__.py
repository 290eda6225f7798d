"""
Perplexica Ask tool package.

Expose the tool definition and handler for toolbox registration.
"""

from .client import perform_chat_completion
from .exceptions import (
    InvalidInputError,
    MalformedResponseError,
    NetworkError,
    PerplexicaError,
    UpstreamError,
)
from .handler import perplexica_ask_handler

perplexica_ask_tool = {
    "name": "perplexica_ask",
    "description": (
        "Engages in a conversation using the Perplexica Search API. "
        "Accepts an array of messages (each with a role and content) "
        "and returns a search response with citations from the Perplexica API."
    ),
    "parameters_schema": {
        "type": "object",
        "properties": {
            "messages": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "role": {
                            "type": "string",
                            "description": "Role of the message (e.g., system, user, assistant)",
                        },
                        "content": {
                            "type": "string",
                            "description": "The content of the message",
                        },
                    },
                    "required": ["role", "content"],
                },
                "description": "Array of conversation messages",
            },
        },
        "required": ["messages"],
    },
    "handler": perplexica_ask_handler,
}

__all__ = [
    "perplexica_ask_tool",
    "perplexica_ask_handler",
    "perform_chat_completion",
    "PerplexicaError",
    "InvalidInputError",
    "NetworkError",
    "UpstreamError",
    "MalformedResponseError",
]
