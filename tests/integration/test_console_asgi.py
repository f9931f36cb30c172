"""Integration tests for the console ASGI app."""

import json

import pytest

from gatewaylens.adapters.frameworks.asgi import create_console_app
from gatewaylens.adapters.storage.in_memory import InMemoryLogStorage
from gatewaylens.core.config import SummaryConfig
from gatewaylens.core.exceptions import ConfigurationError
from tests.sources import FailingSource, StaticSource


class TestConsoleMetricsEndpoints:
    """Tests for /api/metrics and /api/metrics/summary."""

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_raw_metrics_passthrough(
        self, static_source: StaticSource, asgi_test_client
    ) -> None:
        app = create_console_app(static_source)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == static_source.text

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_summary(self, static_source: StaticSource, asgi_test_client) -> None:
        app = create_console_app(static_source)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/metrics/summary")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        data = response.json()
        assert data["totalRequests"] == 120
        assert data["statusCodes"] == {"2xx": 105, "4xx": 10, "5xx": 5}
        assert [b["healthy"] for b in data["backends"]] == [True, False]

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_summary_uses_injected_config(self, asgi_test_client) -> None:
        source = StaticSource('gateway_backend_errors_total{backend="b"} 7\n')
        app = create_console_app(
            source, summary_config=SummaryConfig(health_error_threshold=10)
        )

        async with asgi_test_client(app) as client:
            response = await client.get("/api/metrics/summary")

        assert response.json()["backends"][0]["healthy"] is True

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_empty_dump_gives_zero_summary(self, asgi_test_client) -> None:
        app = create_console_app(StaticSource(""))

        async with asgi_test_client(app) as client:
            response = await client.get("/api/metrics/summary")

        assert response.status_code == 200
        assert response.json()["totalRequests"] == 0
        assert response.json()["backends"] == []

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_each_request_fetches_fresh_text(self, asgi_test_client) -> None:
        source = StaticSource("gateway_requests_total 1\n")
        app = create_console_app(source)

        async with asgi_test_client(app) as client:
            first = await client.get("/api/metrics/summary")
            source.text = "gateway_requests_total 2\n"
            second = await client.get("/api/metrics/summary")

        assert first.json()["totalRequests"] == 1
        assert second.json()["totalRequests"] == 2
        assert source.calls == 2


class TestConsoleEndpointStats:
    """Tests for /api/logs."""

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_endpoint_statistics(
        self, static_source: StaticSource, asgi_test_client
    ) -> None:
        app = create_console_app(static_source)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/logs")

        data = response.json()
        assert response.status_code == 200
        assert [e["endpoint"] for e in data["endpoints"]] == ["/api/users", "/api/auth"]
        users = data["endpoints"][0]
        assert users["total_requests"] == 90
        assert users["status_4xx"] == 10
        assert users["error_rate"] == pytest.approx(11.11, abs=0.01)
        assert data["timestamp"].endswith("+00:00")


class TestConsoleErrors:
    """Tests for upstream failure translation."""

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    @pytest.mark.parametrize("path", ["/api/metrics", "/api/metrics/summary", "/api/logs"])
    async def test_gateway_status_forwarded(
        self, path: str, upstream_error_source: FailingSource, asgi_test_client
    ) -> None:
        app = create_console_app(upstream_error_source)

        async with asgi_test_client(app) as client:
            response = await client.get(path)

        assert response.status_code == 503
        assert response.json() == {"error": "Gateway error: backend overloaded"}

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_unreachable_gateway(
        self, unreachable_source: FailingSource, asgi_test_client
    ) -> None:
        app = create_console_app(unreachable_source)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/metrics/summary")

        assert response.status_code == 500
        assert response.json() == {"error": "Connection refused"}

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_unexpected_error_is_internal_server_error(
        self, log_storage: InMemoryLogStorage, asgi_test_client
    ) -> None:
        app = create_console_app(FailingSource(RuntimeError("bug")), log_storage=log_storage)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/logs")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal Server Error"}
        [entry] = [e async for e in log_storage.read(level="ERROR")]
        assert entry.message == "Failed to fetch request logs"
        assert entry.attributes["exc_type"] == "RuntimeError"

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_unknown_path_returns_404(
        self, static_source: StaticSource, asgi_test_client
    ) -> None:
        app = create_console_app(static_source)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/unknown")

        assert response.status_code == 404


class TestConsoleConfig:
    """Tests for /api/config."""

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_config_passthrough(
        self, static_source: StaticSource, asgi_test_client
    ) -> None:
        app = create_console_app(static_source, config_source=static_source)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/config")

        assert response.status_code == 200
        assert response.json() == static_source.config

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_config_without_source_is_404(
        self, static_source: StaticSource, asgi_test_client
    ) -> None:
        app = create_console_app(static_source)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/config")

        assert response.status_code == 404

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_missing_admin_token(
        self, static_source: StaticSource, asgi_test_client
    ) -> None:
        config_source = FailingSource(ConfigurationError("Admin token not configured"))
        app = create_console_app(static_source, config_source=config_source)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/config")

        assert response.status_code == 500
        assert response.json() == {"error": "Admin token not configured"}


class TestConsoleDiagnostics:
    """Tests for /api/diagnostics."""

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_skipped_lines_recorded(
        self, log_storage: InMemoryLogStorage, asgi_test_client
    ) -> None:
        source = StaticSource("gateway_requests_total 3\nnot a metric line\n")
        app = create_console_app(source, log_storage=log_storage)

        async with asgi_test_client(app) as client:
            summary = await client.get("/api/metrics/summary")
            response = await client.get("/api/diagnostics?level=warn")

        assert summary.json()["totalRequests"] == 3
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/x-ndjson"
        [line] = response.text.strip().split("\n")
        entry = json.loads(line)
        assert entry["level"] == "WARN"
        assert entry["attributes"]["line_number"] == 2

    @pytest.mark.tier(2)
    @pytest.mark.asgi
    async def test_empty_diagnostics(
        self, static_source: StaticSource, asgi_test_client
    ) -> None:
        app = create_console_app(static_source)

        async with asgi_test_client(app) as client:
            response = await client.get("/api/diagnostics")

        assert response.status_code == 200
        assert response.text == ""
