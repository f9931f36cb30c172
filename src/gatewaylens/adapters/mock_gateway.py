"""Mock gateway for developing the console without the real gateway.

Counter state lives in an explicit GatewayCounters object that is injected
into the middleware and the app, so nothing is process-global and tests can
inspect or pre-seed it.
"""

import fnmatch
import json
import threading
from dataclasses import dataclass
from typing import Any

from gatewaylens.adapters.frameworks.asgi import (
    ASGIApp,
    Receive,
    Scope,
    Send,
    _send_response,
)
from gatewaylens.core.encoding.prometheus import encode_exposition
from gatewaylens.core.metrics import counter, gauge
from gatewaylens.core.models import MetricSample

HELP_TEXTS = {
    "gateway_requests_total": "Total number of requests",
    "gateway_active_connections": "Active connections",
    "gateway_auth_success_total": "Successful authentications",
    "gateway_auth_failure_total": "Failed authentications",
    "gateway_cache_hits_total": "Cache hits",
    "gateway_cache_misses_total": "Cache misses",
    "gateway_backend_errors_total": "Backend errors",
    "gateway_backend_latency_seconds": "Backend latency",
}

METRIC_TYPES = {
    "gateway_requests_total": "counter",
    "gateway_active_connections": "gauge",
    "gateway_auth_success_total": "counter",
    "gateway_auth_failure_total": "counter",
    "gateway_cache_hits_total": "counter",
    "gateway_cache_misses_total": "counter",
    "gateway_backend_errors_total": "counter",
    "gateway_backend_latency_seconds": "gauge",
}


@dataclass(frozen=True)
class _RequestKey:
    method: str
    path: str
    status: int


class GatewayCounters:
    """Thread-safe counter state behind the mock gateway's /metrics.

    Backend latency is an exponential moving average (90% old, 10% new)
    seeded with the first observation.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._requests: dict[_RequestKey, int] = {}
        self._active_connections = 0
        self._auth = {"success": 0, "failure": 0}
        self._cache = {"hits": 0, "misses": 0}
        self._backend_errors: dict[str, int] = {}
        self._backend_latency: dict[str, float] = {}

    def record_request(self, method: str, path: str, status: int) -> None:
        """Count one finished request."""
        key = _RequestKey(method, path, status)
        with self._lock:
            self._requests[key] = self._requests.get(key, 0) + 1

    def connection_opened(self) -> None:
        with self._lock:
            self._active_connections += 1

    def connection_closed(self) -> None:
        with self._lock:
            self._active_connections = max(0, self._active_connections - 1)

    def record_auth(self, success: bool) -> None:
        with self._lock:
            self._auth["success" if success else "failure"] += 1

    def record_cache(self, hit: bool) -> None:
        with self._lock:
            self._cache["hits" if hit else "misses"] += 1

    def record_backend_error(self, backend: str) -> None:
        with self._lock:
            self._backend_errors[backend] = self._backend_errors.get(backend, 0) + 1

    def record_backend_latency(self, backend: str, seconds: float) -> None:
        with self._lock:
            previous = self._backend_latency.get(backend)
            if previous is None:
                self._backend_latency[backend] = seconds
            else:
                self._backend_latency[backend] = previous * 0.9 + seconds * 0.1

    @property
    def total_requests(self) -> int:
        with self._lock:
            return sum(self._requests.values())

    def samples(self) -> list[MetricSample]:
        """Snapshot the counters as metric samples.

        The request counter is emitted both as an unlabeled total and per
        method/path/status.
        """
        with self._lock:
            requests = dict(self._requests)
            active = self._active_connections
            auth = dict(self._auth)
            cache = dict(self._cache)
            errors = dict(self._backend_errors)
            latency = dict(self._backend_latency)

        samples = [counter("gateway_requests_total", sum(requests.values()))]
        for key, count in requests.items():
            samples.append(
                counter(
                    "gateway_requests_total",
                    count,
                    labels={
                        "method": key.method,
                        "path": key.path,
                        "status": str(key.status),
                    },
                )
            )
        samples.append(gauge("gateway_active_connections", active))
        samples.append(counter("gateway_auth_success_total", auth["success"]))
        samples.append(counter("gateway_auth_failure_total", auth["failure"]))
        samples.append(counter("gateway_cache_hits_total", cache["hits"]))
        samples.append(counter("gateway_cache_misses_total", cache["misses"]))
        for backend, count in errors.items():
            samples.append(
                counter("gateway_backend_errors_total", count, {"backend": backend})
            )
        for backend, seconds in latency.items():
            samples.append(
                gauge("gateway_backend_latency_seconds", seconds, {"backend": backend})
            )
        return samples

    def render(self) -> str:
        """Render the counters as exposition text with HELP/TYPE headers."""
        return encode_exposition(self.samples(), HELP_TEXTS, METRIC_TYPES)


class GatewayMetricsMiddleware:
    """ASGI middleware that counts every HTTP request into GatewayCounters.

    Requests that raise are counted with status 500 and the exception is
    re-raised. Active connections are tracked for the request's duration.
    """

    def __init__(
        self,
        app: ASGIApp,
        counters: GatewayCounters,
        exclude_paths: list[str] | None = None,
    ) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
            counters: Counter state to update.
            exclude_paths: Paths not to count. Supports exact matches and
                wildcard patterns (e.g., "/admin/*").
        """
        self.app = app
        self.counters = counters
        self.exclude_paths = exclude_paths or []

    def _path_excluded(self, path: str) -> bool:
        """Check if path matches any pattern in exclude_paths."""
        return any(fnmatch.fnmatch(path, pattern) for pattern in self.exclude_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self._path_excluded(scope["path"]):
            await self.app(scope, receive, send)
            return

        captured: dict[str, Any] = {"status": None}

        async def wrapped_send(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                captured["status"] = message["status"]
            await send(message)

        self.counters.connection_opened()
        try:
            await self.app(scope, receive, wrapped_send)
        except Exception:
            captured["status"] = 500
            raise
        finally:
            self.counters.connection_closed()
            if captured["status"] is not None:
                self.counters.record_request(
                    scope["method"], scope["path"], captured["status"]
                )


async def _read_body(receive: Receive) -> bytes:
    """Collect the full request body from ASGI receive messages."""
    body = b""
    while True:
        message = await receive()
        body += message.get("body", b"")
        if not message.get("more_body", False):
            return body


def _authorized(scope: Scope, admin_token: str) -> bool:
    expected = f"Bearer {admin_token}".encode()
    headers: list[tuple[bytes, bytes]] = scope.get("headers", [])
    return any(
        name.lower() == b"authorization" and value == expected
        for name, value in headers
    )


def create_mock_gateway_app(
    counters: GatewayCounters,
    admin_token: str,
    admin_config: dict[str, Any] | None = None,
) -> ASGIApp:
    """Create an ASGI app imitating the gateway's public and admin endpoints.

    Endpoints:
        GET  /health        - {"status": "healthy"}
        GET  /metrics       - exposition text rendered from ``counters``
        GET  /admin/config  - current admin config (bearer token required)
        POST /admin/config  - replace admin config (bearer token required)

    Args:
        counters: Counter state rendered by /metrics.
        admin_token: Token expected in ``Authorization: Bearer <token>``.
        admin_config: Initial admin configuration document.

    Returns:
        ASGI application callable.
    """
    state: dict[str, Any] = {"config": dict(admin_config or {})}

    async def _json(send: Send, status: int, payload: Any) -> None:
        await _send_response(send, status, "application/json", json.dumps(payload))

    async def _admin(scope: Scope, receive: Receive, send: Send) -> None:
        if not _authorized(scope, admin_token):
            await _json(send, 401, {"error": "Unauthorized"})
            return
        if scope["path"] != "/admin/config":
            await _json(send, 404, {"error": "Not found"})
            return
        if scope["method"] == "GET":
            await _json(send, 200, state["config"])
            return
        if scope["method"] == "POST":
            try:
                update = json.loads(await _read_body(receive))
            except ValueError:
                await _json(send, 400, {"error": "Invalid JSON"})
                return
            state["config"] = update
            await _json(send, 200, {"success": True, "config": update})
            return
        await _json(send, 405, {"error": "Method not allowed"})

    async def app(scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return

        path = scope["path"]
        if path == "/health":
            await _json(send, 200, {"status": "healthy"})
        elif path == "/metrics":
            await _send_response(
                send, 200, "text/plain; version=0.0.4; charset=utf-8", counters.render()
            )
        elif path.startswith("/admin/"):
            await _admin(scope, receive, send)
        else:
            await _json(send, 404, {"error": "Not found"})

    return GatewayMetricsMiddleware(app, counters, exclude_paths=["/metrics", "/health"])
