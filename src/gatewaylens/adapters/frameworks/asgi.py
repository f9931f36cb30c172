"""ASGI generic adapter for the admin console endpoints.

This adapter provides a framework-agnostic ASGI application that can be used
with any ASGI server (uvicorn, hypercorn, daphne) without requiring FastAPI
as a dependency.
"""

import json
from collections.abc import Callable, Coroutine
from typing import Any
from urllib.parse import parse_qs

from gatewaylens.adapters.console import MetricsConsole, translate_error
from gatewaylens.adapters.frameworks.query_params import (
    _parse_level_param,
    _parse_since_param,
)
from gatewaylens.core.config import SummaryConfig
from gatewaylens.core.encoding.ndjson import encode_logs
from gatewaylens.core.ports import AdminConfigSource, ExpositionSource, LogStoragePort

# ASGI type aliases
Scope = dict[str, Any]
Receive = Callable[[], Coroutine[Any, Any, dict[str, Any]]]
Send = Callable[[dict[str, Any]], Coroutine[Any, Any, None]]
ASGIApp = Callable[[Scope, Receive, Send], Coroutine[Any, Any, None]]

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"
NDJSON_CONTENT_TYPE = "application/x-ndjson"


def _parse_query_params(scope: Scope) -> dict[str, list[str]]:
    """Parse query string from ASGI scope into parameter dictionary.

    Args:
        scope: ASGI scope dictionary containing request metadata.

    Returns:
        Dictionary mapping parameter names to lists of values.
        Returns empty dict if query_string is missing or empty.
    """
    query_string = scope.get("query_string", b"").decode(errors="replace")
    return parse_qs(query_string)


async def _send_response(send: Send, status: int, content_type: str, body: str) -> None:
    """Send an HTTP response with headers and body.

    Args:
        send: ASGI send callable for writing response.
        status: HTTP status code.
        content_type: Content-Type header value.
        body: Response body as string (will be encoded to bytes).
    """
    headers = [(b"content-type", content_type.encode())]
    await send({"type": "http.response.start", "status": status, "headers": headers})
    await send({"type": "http.response.body", "body": body.encode()})


async def _send_json(send: Send, status: int, payload: Any) -> None:
    await _send_response(send, status, JSON_CONTENT_TYPE, json.dumps(payload))


async def _handle_endpoint(
    send: Send,
    console: MetricsConsole,
    endpoint_func: Callable[[], Coroutine[Any, Any, str]],
    content_type: str,
    log_message: str,
) -> None:
    """Execute an endpoint function with error handling and send response.

    Gateway failures are translated to their JSON error responses; any
    other exception is recorded and answered with a 500.

    Args:
        send: ASGI send callable for writing response.
        console: Console whose log storage records failures.
        endpoint_func: Async function that returns response body.
        content_type: Content-Type header for success response.
        log_message: Message to log on error.
    """
    try:
        body = await endpoint_func()
    except Exception as exc:
        await console.record_failure(log_message)
        status, payload = translate_error(exc)
        await _send_json(send, status, payload)
        return
    await _send_response(send, 200, content_type, body)


def create_asgi_app(console: MetricsConsole) -> ASGIApp:
    """Create an ASGI app serving the console endpoints of ``console``.

    Endpoints:
        /api/metrics          - raw exposition text passthrough
        /api/metrics/summary  - dashboard summary (JSON)
        /api/logs             - per-endpoint request statistics (JSON)
        /api/config           - admin configuration passthrough (JSON)
        /api/diagnostics      - recorded diagnostics (NDJSON, since/level filters)

    Args:
        console: MetricsConsole holding the sources and log storage.

    Returns:
        ASGI application callable.
    """

    async def _summary_json() -> str:
        return json.dumps(await console.summary())

    async def _endpoints_json() -> str:
        return json.dumps(await console.endpoints())

    async def _config_json() -> str:
        return json.dumps(await console.admin_config())

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        path = scope["path"]

        if path == "/api/metrics":
            await _handle_endpoint(
                send,
                console,
                console.raw_metrics,
                TEXT_CONTENT_TYPE,
                "Failed to fetch metrics",
            )
        elif path == "/api/metrics/summary":
            await _handle_endpoint(
                send,
                console,
                _summary_json,
                JSON_CONTENT_TYPE,
                "Failed to build metrics summary",
            )
        elif path == "/api/logs":
            await _handle_endpoint(
                send,
                console,
                _endpoints_json,
                JSON_CONTENT_TYPE,
                "Failed to fetch request logs",
            )
        elif path == "/api/config" and console.config_source is not None:
            await _handle_endpoint(
                send,
                console,
                _config_json,
                JSON_CONTENT_TYPE,
                "Failed to fetch config",
            )
        elif path == "/api/diagnostics":
            params = _parse_query_params(scope)
            since = _parse_since_param(params)
            level = _parse_level_param(params)
            body = await encode_logs(console.log_storage.read(since=since, level=level))
            await _send_response(send, 200, NDJSON_CONTENT_TYPE, body)
        else:
            await _send_response(send, 404, "text/plain", "Not Found")

    return app


def create_console_app(
    source: ExpositionSource,
    config_source: AdminConfigSource | None = None,
    log_storage: LogStoragePort | None = None,
    summary_config: SummaryConfig | None = None,
) -> ASGIApp:
    """Create the console ASGI app from its collaborators.

    Args:
        source: Where the exposition text comes from (e.g., GatewayClient).
        config_source: Where the admin configuration comes from (optional).
            Without one, /api/config answers 404.
        log_storage: Storage for diagnostics. Defaults to in-memory storage.
        summary_config: Metric names and health threshold.

    Returns:
        ASGI application callable.
    """
    console = MetricsConsole(
        source,
        config_source=config_source,
        log_storage=log_storage,
        summary_config=summary_config,
    )
    return create_asgi_app(console)
