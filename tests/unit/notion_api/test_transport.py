"""Tests for the sync and async HTTP transports.

Covers:
- Request headers and URL construction
- Query strings and JSON bodies
- Error body mapping with operation prefixes
- Network errors, empty bodies and malformed success bodies
- Debug payload dumps and client ownership
"""

from __future__ import annotations

import json

import httpx
import pytest
from factories import TOKEN, RecordingHandler

from typednotion.config import NotionConfig
from typednotion.errors import (
    ErrorCode,
    NotionDecodeError,
    NotionNetworkError,
    NotionRateLimitedError,
    NotionUnknownAPIError,
    NotionValidationError,
)
from typednotion.notion_api.transport import AsyncNotionTransport, NotionTransport, build_headers

_VALIDATION_BODY = {
    "object": "error",
    "status": 400,
    "code": "validation_error",
    "message": "foobar",
}


# ---------------------------------------------------------------------------
# Headers and URLs
# ---------------------------------------------------------------------------


class TestRequestShape:
    def test_build_headers(self, config):
        headers = build_headers(config)
        assert headers["Authorization"] == f"Bearer {TOKEN}"
        assert headers["Notion-Version"] == "2022-06-28"
        assert headers["User-Agent"].startswith("typednotion/")
        assert headers["Content-Type"] == "application/json"

    def test_headers_sent(self, config, handler, http_client):
        NotionTransport(config, client=http_client).request("GET", "/users/me")
        request = handler.last
        assert request.headers["authorization"] == f"Bearer {TOKEN}"
        assert request.headers["notion-version"] == "2022-06-28"
        assert request.headers["user-agent"] == config.user_agent

    def test_url_joins_base_and_path(self, handler, http_client):
        config = NotionConfig(token=TOKEN, base_url="http://localhost:9999/v1/")
        NotionTransport(config, client=http_client).request("GET", "/pages/abc")
        assert str(handler.last.url) == "http://localhost:9999/v1/pages/abc"

    def test_query_params(self, config, handler, http_client):
        transport = NotionTransport(config, client=http_client)
        transport.request("GET", "/users", params={"start_cursor": "c1", "page_size": "10"})
        assert handler.last.url.params["start_cursor"] == "c1"
        assert handler.last.url.params["page_size"] == "10"

    def test_json_body(self, config, handler, http_client):
        transport = NotionTransport(config, client=http_client)
        transport.request("POST", "/search", json={"query": "notes"})
        assert handler.last.method == "POST"
        assert handler.last_json() == {"query": "notes"}

    def test_custom_notion_version(self, handler, http_client):
        config = NotionConfig(token=TOKEN, notion_version="2021-05-13")
        NotionTransport(config, client=http_client).request("GET", "/users")
        assert handler.last.headers["notion-version"] == "2021-05-13"


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class TestResponses:
    def test_returns_parsed_body(self, config, handler, http_client):
        handler.queue(200, {"object": "user", "id": "u1"})
        result = NotionTransport(config, client=http_client).request("GET", "/users/u1")
        assert result == {"object": "user", "id": "u1"}

    def test_empty_body_is_empty_dict(self, config, handler, http_client):
        handler.queue(204, b"")
        assert NotionTransport(config, client=http_client).request("DELETE", "/blocks/b1") == {}

    def test_validation_error(self, config, handler, http_client):
        handler.queue(400, _VALIDATION_BODY)
        transport = NotionTransport(config, client=http_client)
        with pytest.raises(NotionValidationError) as exc_info:
            transport.request("POST", "/pages", json={}, prefix="failed to create page")
        err = exc_info.value
        assert err.code == ErrorCode.VALIDATION_ERROR
        assert str(err) == "failed to create page: foobar (code: validation_error, status: 400)"
        assert err.context["method"] == "POST"
        assert err.context["path"] == "/pages"

    def test_rate_limited_is_not_retried(self, config, handler, http_client):
        handler.queue(429, {"object": "error", "status": 429, "code": "rate_limited", "message": "slow"})
        handler.queue(200, {})
        transport = NotionTransport(config, client=http_client)
        with pytest.raises(NotionRateLimitedError):
            transport.request("GET", "/users")
        assert len(handler.requests) == 1

    def test_non_json_error_body(self, config, handler, http_client):
        handler.queue(502, "Bad Gateway")
        transport = NotionTransport(config, client=http_client)
        with pytest.raises(NotionUnknownAPIError) as exc_info:
            transport.request("GET", "/users")
        assert exc_info.value.status == 502
        assert "Bad Gateway" in str(exc_info.value)

    def test_non_json_success_body(self, config, handler, http_client):
        handler.queue(200, "<html>")
        with pytest.raises(NotionDecodeError, match="not valid JSON"):
            NotionTransport(config, client=http_client).request("GET", "/users")

    def test_non_object_success_body(self, config, handler, http_client):
        handler.queue(200, [1, 2, 3])
        with pytest.raises(NotionDecodeError, match="not a JSON object"):
            NotionTransport(config, client=http_client).request("GET", "/users")


# ---------------------------------------------------------------------------
# Network errors
# ---------------------------------------------------------------------------


def _refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


class TestNetworkErrors:
    def test_connect_error_is_wrapped(self, config):
        client = httpx.Client(transport=httpx.MockTransport(_refuse))
        transport = NotionTransport(config, client=client)
        with pytest.raises(NotionNetworkError) as exc_info:
            transport.request("GET", "/users/me", prefix="failed to find current user")
        err = exc_info.value
        assert err.code == ErrorCode.NETWORK_ERROR
        assert str(err) == "failed to find current user: network error on GET /users/me: connection refused"
        assert isinstance(err.cause, httpx.ConnectError)
        assert err.context == {"method": "GET", "path": "/users/me"}

    def test_message_without_prefix(self, config):
        client = httpx.Client(transport=httpx.MockTransport(_refuse))
        with pytest.raises(NotionNetworkError, match="^network error on GET /users"):
            NotionTransport(config, client=client).request("GET", "/users")


# ---------------------------------------------------------------------------
# Debug dump
# ---------------------------------------------------------------------------


class TestDebugDump:
    def test_dump_is_redacted(self, handler, http_client, capsys):
        config = NotionConfig(token=TOKEN, debug_dump_payload=True)
        handler.queue(200, {"object": "list", "note": f"echo {TOKEN}"})
        NotionTransport(config, client=http_client).request("POST", "/search", json={"query": "x"})

        err = capsys.readouterr().err
        dump = json.loads(err)
        assert dump["method"] == "POST"
        assert dump["request_body"] == {"query": "x"}
        assert dump["response_status"] == 200
        assert TOKEN not in err

    def test_no_dump_by_default(self, config, http_client, capsys):
        NotionTransport(config, client=http_client).request("GET", "/users")
        assert capsys.readouterr().err == ""


# ---------------------------------------------------------------------------
# Client ownership
# ---------------------------------------------------------------------------


class TestClientOwnership:
    def test_injected_client_left_open(self, config, http_client):
        with NotionTransport(config, client=http_client):
            pass
        assert http_client.is_closed is False

    def test_owned_client_closed(self, config):
        transport = NotionTransport(config)
        transport.close()
        assert transport._client.is_closed is True


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------


class TestAsyncTransport:
    @pytest.mark.asyncio
    async def test_request_and_headers(self, config, handler, async_http_client):
        handler.queue(200, {"object": "user", "id": "u1"})
        async with AsyncNotionTransport(config, client=async_http_client) as transport:
            result = await transport.request("GET", "/users/u1")
        assert result["id"] == "u1"
        assert handler.last.headers["authorization"] == f"Bearer {TOKEN}"
        assert async_http_client.is_closed is False
        await async_http_client.aclose()

    @pytest.mark.asyncio
    async def test_error_mapping(self, config, handler, async_http_client):
        handler.queue(400, _VALIDATION_BODY)
        transport = AsyncNotionTransport(config, client=async_http_client)
        with pytest.raises(NotionValidationError, match="failed to search: foobar"):
            await transport.request("POST", "/search", json={}, prefix="failed to search")
        await async_http_client.aclose()

    @pytest.mark.asyncio
    async def test_network_error(self, config):
        client = httpx.AsyncClient(transport=httpx.MockTransport(_refuse))
        transport = AsyncNotionTransport(config, client=client)
        with pytest.raises(NotionNetworkError):
            await transport.request("GET", "/users")
        await client.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_closed(self, config):
        transport = AsyncNotionTransport(config)
        await transport.close()
        assert transport._client.is_closed is True


def test_recording_handler_defaults_to_empty_object():
    handler = RecordingHandler()
    response = handler(httpx.Request("GET", "https://api.notion.com/v1/users"))
    assert response.status_code == 200
    assert response.json() == {}
