"""
Perplexica search client

Turns a role-tagged conversation into a single Perplexica search request,
posts it, and renders the answer with its citations.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import aiohttp
from pydantic import ValidationError

from perplexica_mcp.config import PerplexicaSettings, get_perplexica_settings

from .exceptions import InvalidInputError, MalformedResponseError, NetworkError, UpstreamError
from .formatting import format_answer
from .models import Message, ModelSelection, SearchRequest, convert_history

logger = logging.getLogger(__name__)

_UNREADABLE_ERROR_BODY = "Unable to parse error response"


def _describe(exc: BaseException) -> str:
    return str(exc).strip() or type(exc).__name__


def _validate_messages(messages: Sequence[Any]) -> List[Message]:
    if len(messages) == 0:
        raise InvalidInputError("No messages provided")

    parsed: List[Message] = []
    for index, item in enumerate(messages):
        if isinstance(item, Message):
            parsed.append(item)
            continue
        try:
            parsed.append(Message.model_validate(item))
        except ValidationError as exc:
            raise InvalidInputError(
                f"Invalid message at index {index}: each message needs string 'role' and 'content'",
                meta={"index": index, "errors": exc.errors(include_url=False)},
            ) from exc
    return parsed


def build_search_request(messages: Sequence[Any], settings: PerplexicaSettings) -> SearchRequest:
    """Split messages into query + history and wrap them in the fixed request shape."""
    parsed = _validate_messages(messages)
    query_message = parsed[-1]

    return SearchRequest(
        chat_model=ModelSelection(provider=settings.chat_provider, model=settings.chat_model),
        embedding_model=ModelSelection(
            provider=settings.embedding_provider, model=settings.embedding_model
        ),
        optimization_mode=settings.optimization_mode,
        focus_mode=settings.focus_mode,
        query=query_message.content,
        history=convert_history(parsed[:-1]),
    )


def build_headers(settings: PerplexicaSettings) -> Dict[str, str]:
    headers = {"Content-Type": "application/json"}
    if settings.api_key:
        headers["Authorization"] = f"Bearer {settings.api_key}"
    return headers


async def perform_chat_completion(
    messages: Sequence[Any],
    *,
    settings: Optional[PerplexicaSettings] = None,
) -> str:
    """
    Ask Perplexica about the last message, using earlier turns as history.

    Args:
        messages: Conversation messages, each with ``role`` and ``content``.
        settings: Runtime configuration; defaults to the process-wide settings.

    Returns:
        The answer text, followed by a numbered citation list when the
        backend returned sources.

    Raises:
        InvalidInputError: ``messages`` is empty or malformed.
        NetworkError: the backend could not be reached.
        UpstreamError: the backend answered with a non-2xx status.
        MalformedResponseError: the response body is not a JSON object.
    """
    settings = settings or get_perplexica_settings()
    payload = build_search_request(messages, settings).to_payload()
    headers = build_headers(settings)
    timeout = aiohttp.ClientTimeout(total=settings.request_timeout)

    logger.debug(
        "Perplexica search: query=%r history=%d turns", payload["query"], len(payload["history"])
    )

    async with aiohttp.ClientSession(timeout=timeout) as session:
        try:
            response = await session.post(settings.api_url, headers=headers, json=payload)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
            logger.warning("Perplexica request failed: %s", _describe(exc))
            raise NetworkError(
                f"Network error while calling Perplexica API: {_describe(exc)}"
            ) from exc

        async with response:
            if not 200 <= response.status < 300:
                try:
                    error_text = await response.text()
                except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError):
                    error_text = _UNREADABLE_ERROR_BODY
                logger.warning("Perplexica API returned HTTP %s", response.status)
                raise UpstreamError(
                    f"Perplexica API error: {response.status} {response.reason or ''}\n{error_text}",
                    meta={"status": response.status, "reason": response.reason, "body": error_text},
                )

            try:
                data = await response.json(content_type=None)
            except (
                json.JSONDecodeError,
                aiohttp.ClientError,
                asyncio.TimeoutError,
                UnicodeDecodeError,
            ) as exc:
                raise MalformedResponseError(
                    f"Failed to parse JSON response from Perplexica API: {_describe(exc)}"
                ) from exc

    if not isinstance(data, dict):
        raise MalformedResponseError(
            f"Failed to parse JSON response from Perplexica API: expected an object, got {type(data).__name__}"
        )

    return format_answer(data)
