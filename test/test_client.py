import asyncio

import pytest
from aiohttp import web
from aiohttp.test_utils import unused_port

from perplexica_mcp.config import PerplexicaSettings
from tool_box.tools_impl.perplexica_ask import (
    MalformedResponseError,
    NetworkError,
    UpstreamError,
    perform_chat_completion,
)

CONVERSATION = [
    {"role": "system", "content": "You are helpful."},
    {"role": "user", "content": "Hi"},
    {"role": "assistant", "content": "Hello!"},
    {"role": "user", "content": "What is the capital of France?"},
]


def _ask(messages):
    async def call(settings):
        return await perform_chat_completion(messages, settings=settings)

    return call


def test_answer_with_citations(run_against_backend, json_backend, captured):
    handler = json_backend(
        {
            "message": "Paris is the capital.",
            "sources": [{"metadata": {"title": "Wiki", "url": "https://x"}}],
        }
    )
    text = run_against_backend(handler, _ask(CONVERSATION))

    assert text == "Paris is the capital.\n\nCitations:\n[1] Wiki - https://x\n"
    body = captured[0]["body"]
    assert body["query"] == "What is the capital of France?"
    assert body["history"] == [["human", "Hi"], ["assistant", "Hello!"]]
    assert body["focusMode"] == "webSearch"


def test_answer_without_sources(run_against_backend, json_backend):
    text = run_against_backend(json_backend({"message": "Just text", "sources": []}), _ask(CONVERSATION))
    assert text == "Just text"


def test_no_authorization_header_without_key(run_against_backend, json_backend, captured):
    run_against_backend(json_backend({"message": "ok"}), _ask(CONVERSATION))
    headers = captured[0]["headers"]
    assert "Authorization" not in headers
    assert headers["Content-Type"] == "application/json"


def test_bearer_header_with_key(run_against_backend, json_backend, captured):
    run_against_backend(json_backend({"message": "ok"}), _ask(CONVERSATION), api_key="s3cret")
    assert captured[0]["headers"]["Authorization"] == "Bearer s3cret"


def test_upstream_error_carries_status_and_body(run_against_backend, json_backend):
    with pytest.raises(UpstreamError) as excinfo:
        run_against_backend(json_backend(status=500, text="boom"), _ask(CONVERSATION))
    assert excinfo.value.message == "Perplexica API error: 500 Internal Server Error\nboom"
    assert excinfo.value.meta["status"] == 500


def test_invalid_json_is_malformed_response(run_against_backend, json_backend):
    with pytest.raises(MalformedResponseError, match="Failed to parse JSON response from Perplexica API"):
        run_against_backend(json_backend(text="<html>not json</html>"), _ask(CONVERSATION))


def test_non_object_json_is_malformed_response(run_against_backend, json_backend):
    with pytest.raises(MalformedResponseError):
        run_against_backend(json_backend(["not", "an", "object"]), _ask(CONVERSATION))


def test_connection_refused_is_network_error():
    settings = PerplexicaSettings(api_url=f"http://127.0.0.1:{unused_port()}/api/search")
    with pytest.raises(NetworkError, match="Network error while calling Perplexica API"):
        asyncio.run(perform_chat_completion(CONVERSATION, settings=settings))


def test_timeout_is_network_error(run_against_backend):
    async def slow(request: web.Request) -> web.Response:
        await asyncio.sleep(2)
        return web.json_response({"message": "late"})

    with pytest.raises(NetworkError):
        run_against_backend(slow, _ask(CONVERSATION), request_timeout=0.2)


def test_unreadable_error_body_uses_placeholder(run_against_backend):
    async def truncated(request: web.Request) -> web.StreamResponse:
        response = web.StreamResponse(status=502)
        response.content_length = 100
        await response.prepare(request)
        await response.write(b"partial")
        request.transport.close()
        return response

    with pytest.raises(UpstreamError) as excinfo:
        run_against_backend(truncated, _ask(CONVERSATION))
    assert excinfo.value.message.startswith("Perplexica API error: 502 ")
    assert excinfo.value.message.endswith("\nUnable to parse error response")
