"""Sync and async HTTP transports for the Notion API.

Each call is one request/response cycle:

1. Send the HTTP request with auth, version and user agent headers.
2. On ``2xx`` -- return the parsed JSON response (``{}`` for an empty body).
3. On any other status -- decode the Notion error body and raise the
   matching :class:`~typednotion.errors.APIError` subclass.
4. On a transport failure -- raise :class:`NotionNetworkError`.

There are no retries and no rate limiting; callers that want them wrap
the client or inject an ``httpx`` client with their own transport.
"""

from __future__ import annotations

import json as _json
import sys
import time
from typing import Any

import httpx

from typednotion.config import NotionConfig
from typednotion.errors import NotionDecodeError, NotionNetworkError, api_error_from_body
from typednotion.observability import NoopMetricsHook, get_logger
from typednotion.utils.redact import redact

log = get_logger("typednotion.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def build_headers(config: NotionConfig) -> dict[str, str]:
    """Headers sent with every request."""
    return {
        "Authorization": f"Bearer {config.token}",
        "Notion-Version": config.notion_version,
        "User-Agent": config.user_agent,
        "Content-Type": "application/json",
    }


def _url(config: NotionConfig, path: str) -> str:
    return config.base_url.rstrip("/") + path


def _dump_payload(
    method: str,
    url: str,
    payload: Any | None,
    response_status: int | None,
    response_body: Any | None,
    token: str | None = None,
) -> None:
    """Write a redacted debug dump of the request/response to stderr."""
    dump: dict[str, Any] = {
        "method": method,
        "url": url,
    }
    if payload is not None:
        dump["request_body"] = payload
    if response_status is not None:
        dump["response_status"] = response_status
    if response_body is not None:
        dump["response_body"] = response_body
    print(
        _json.dumps(redact(dump, token), indent=2, default=str),
        file=sys.stderr,
    )


def _emit_debug_dump(
    config: NotionConfig,
    method: str,
    response: httpx.Response,
    json_payload: Any,
) -> None:
    if not config.debug_dump_payload:
        return
    try:
        resp_body = response.json()
    except ValueError:
        resp_body = response.text[:1000]
    _dump_payload(
        method, str(response.url), json_payload,
        response.status_code, resp_body,
        token=config.token,
    )


def _record(metrics: Any, method: str, path: str, status: str, elapsed_ms: float | None) -> None:
    tags = {"method": method, "path": path, "status": status}
    metrics.increment("typednotion.requests_total", tags=tags)
    if elapsed_ms is not None:
        metrics.timing("typednotion.request_duration_ms", elapsed_ms, tags=tags)


def _network_error(
    metrics: Any,
    method: str,
    path: str,
    exc: Exception,
    prefix: str,
) -> NotionNetworkError:
    _record(metrics, method, path, "error", None)
    log.warning(
        "Request network error",
        extra={
            "extra_fields": {
                "op": "request",
                "method": method,
                "path": path,
                "error": str(exc),
            }
        },
    )
    message = f"network error on {method} {path}: {exc}"
    return NotionNetworkError(
        message=f"{prefix}: {message}" if prefix else message,
        context={"method": method, "path": path},
        cause=exc,
    )


def _handle_response(
    config: NotionConfig,
    metrics: Any,
    method: str,
    path: str,
    response: httpx.Response,
    elapsed_ms: float,
    json_payload: Any,
    prefix: str,
) -> dict[str, Any]:
    """Turn a response into its JSON body or raise the mapped error."""
    status = response.status_code
    _record(metrics, method, path, str(status), elapsed_ms)
    log.debug(
        "Notion API request",
        extra={
            "extra_fields": {
                "op": "request",
                "method": method,
                "path": path,
                "status_code": status,
                "duration_ms": round(elapsed_ms, 2),
            }
        },
    )
    _emit_debug_dump(config, method, response, json_payload)

    if 200 <= status < 300:
        if status == 204 or not response.content:
            return {}
        try:
            result = response.json()
        except ValueError as exc:
            raise NotionDecodeError(
                f"response of {method} {path} is not valid JSON",
                context={"kind": "response", "method": method, "path": path},
                cause=exc,
            ) from exc
        if not isinstance(result, dict):
            raise NotionDecodeError(
                f"response of {method} {path} is not a JSON object",
                context={"kind": "response", "method": method, "path": path},
            )
        return result

    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {"message": response.text[:500]}
    error = api_error_from_body(body, status, prefix=prefix, context={"method": method, "path": path})
    metrics.increment(
        "typednotion.api_errors_total",
        tags={"method": method, "path": path, "code": error.api_code},
    )
    log.warning(
        "Notion API error",
        extra={
            "extra_fields": {
                "op": "request",
                "method": method,
                "path": path,
                "status_code": status,
                "notion_code": error.api_code,
            }
        },
    )
    raise error


# ---------------------------------------------------------------------------
# Sync transport
# ---------------------------------------------------------------------------

class NotionTransport:
    """Synchronous HTTP transport.

    Parameters
    ----------
    config:
        A :class:`NotionConfig` instance.
    client:
        Optional ``httpx.Client`` to send requests with.  When given, the
        caller owns it and :meth:`close` leaves it open; ``timeout_seconds``
        and ``http_proxy`` are then taken from the injected client.
    """

    def __init__(self, config: NotionConfig, client: httpx.Client | None = None) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._headers = build_headers(config)
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(
                timeout=httpx.Timeout(config.timeout_seconds),
                proxy=config.http_proxy,
            )
        self._client = client

    # -- public API --------------------------------------------------------

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: dict[str, str] | None = None,
        prefix: str = "",
    ) -> dict[str, Any]:
        """Execute one HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method (``GET``, ``POST``, ``PATCH``, ``DELETE``).
        path:
            API path relative to ``base_url`` (e.g. ``/pages``).
        json:
            JSON request body.
        params:
            Query string parameters.
        prefix:
            Operation description prepended to error messages, e.g.
            ``"failed to find page"``.

        Returns
        -------
        dict
            Parsed JSON response body.

        Raises
        ------
        APIError
            A subclass matching the Notion error code, on non-2xx responses.
        NotionNetworkError
            On transport-level failures.
        NotionDecodeError
            When a successful response is not a JSON object.
        """
        t0 = time.monotonic()
        try:
            response = self._client.request(
                method,
                _url(self._config, path),
                json=json,
                params=params,
                headers=self._headers,
            )
        except httpx.TransportError as exc:
            raise _network_error(self._metrics, method, path, exc, prefix) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000
        return _handle_response(
            self._config, self._metrics, method, path, response, elapsed_ms, json, prefix,
        )

    def close(self) -> None:
        """Close the underlying HTTP client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> NotionTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport:
    """Asynchronous HTTP transport.

    Mirrors :class:`NotionTransport` but uses ``httpx.AsyncClient``.

    Parameters
    ----------
    config:
        A :class:`NotionConfig` instance.
    client:
        Optional caller-owned ``httpx.AsyncClient``.
    """

    def __init__(self, config: NotionConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()
        self._headers = build_headers(config)
        self._owns_client = client is None
        if client is None:
            client = httpx.AsyncClient(
                timeout=httpx.Timeout(config.timeout_seconds),
                proxy=config.http_proxy,
            )
        self._client = client

    # -- public API --------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        params: dict[str, str] | None = None,
        prefix: str = "",
    ) -> dict[str, Any]:
        """Execute one HTTP request against the Notion API (async).

        See :meth:`NotionTransport.request` for full documentation.
        """
        t0 = time.monotonic()
        try:
            response = await self._client.request(
                method,
                _url(self._config, path),
                json=json,
                params=params,
                headers=self._headers,
            )
        except httpx.TransportError as exc:
            raise _network_error(self._metrics, method, path, exc, prefix) from exc
        elapsed_ms = (time.monotonic() - t0) * 1000
        return _handle_response(
            self._config, self._metrics, method, path, response, elapsed_ms, json, prefix,
        )

    async def close(self) -> None:
        """Close the underlying async HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
