"""Shared test fixtures for all test modules."""

import httpx
import pytest

from gatewaylens.adapters.storage.in_memory import InMemoryLogStorage
from gatewaylens.core.exceptions import GatewayError, GatewayUnavailableError
from tests.sources import GATEWAY_METRICS, FailingSource, StaticSource


@pytest.fixture
def gateway_metrics() -> str:
    """Exposition text resembling a real gateway dump."""
    return GATEWAY_METRICS


@pytest.fixture
def static_source() -> StaticSource:
    """Source serving GATEWAY_METRICS and a small admin config."""
    return StaticSource()


@pytest.fixture
def upstream_error_source() -> FailingSource:
    """Source whose gateway answers 503."""
    return FailingSource(GatewayError("backend overloaded", 503))


@pytest.fixture
def unreachable_source() -> FailingSource:
    """Source whose gateway cannot be reached."""
    return FailingSource(GatewayUnavailableError("Connection refused"))


@pytest.fixture
def log_storage() -> InMemoryLogStorage:
    """Fixture providing an empty log storage."""
    return InMemoryLogStorage()


@pytest.fixture
def asgi_test_client():
    """Factory fixture that creates an httpx.AsyncClient for ASGI testing.

    Returns a callable that accepts an ASGI app and yields a client
    with ASGITransport configured.

    Usage:
        async def test_something(asgi_test_client):
            app = create_console_app(source)
            async with asgi_test_client(app) as client:
                response = await client.get("/api/metrics/summary")
    """

    def _get_client(app):
        """Return an AsyncClient context manager for the given app."""
        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://test"
        )

    return _get_client
