"""HTTP client for the gateway's public metrics and admin endpoints."""

import logging
from typing import Any

import httpx

from gatewaylens.core.config import ConsoleSettings
from gatewaylens.core.exceptions import (
    ConfigurationError,
    GatewayError,
    GatewayUnavailableError,
)

logger = logging.getLogger(__name__)


class GatewayClient:
    """Fetches exposition text and admin configuration from the gateway.

    Implements the ExpositionSource and AdminConfigSource ports. The metrics
    endpoint is public; admin requests carry ``Authorization: Bearer``.

    Example:
        ```python
        client = GatewayClient(ConsoleSettings.from_env())
        text = await client.fetch_metrics()
        ```
    """

    def __init__(
        self,
        settings: ConsoleSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Gateway URL, admin token and timeout.
            transport: Optional httpx transport (e.g., httpx.MockTransport or
                httpx.ASGITransport in tests).
        """
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.gateway_url.rstrip("/"),
            timeout=self.settings.timeout_seconds,
            transport=self._transport,
        )

    async def _get(self, path: str, headers: dict[str, str]) -> httpx.Response:
        try:
            async with self._client() as client:
                response = await client.get(path, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("Gateway request to %s failed: %s", path, exc)
            raise GatewayUnavailableError(
                str(exc) or f"Failed to reach gateway at {self.settings.gateway_url}"
            ) from exc

        if not response.is_success:
            logger.warning(
                "Gateway returned %d for %s", response.status_code, path
            )
            raise GatewayError(response.text, response.status_code)
        return response

    async def fetch_metrics(self) -> str:
        """Return the raw exposition text from ``/metrics``."""
        response = await self._get("/metrics", {"Accept": "text/plain"})
        return response.text

    async def fetch_config(self) -> dict[str, Any]:
        """Return the admin configuration from ``/admin/config``.

        Raises:
            ConfigurationError: No admin token is configured.
            GatewayError: The gateway rejected the request.
            GatewayUnavailableError: The gateway could not be reached.
        """
        if not self.settings.admin_token:
            raise ConfigurationError("Admin token not configured")
        response = await self._get(
            "/admin/config",
            {"Authorization": f"Bearer {self.settings.admin_token}"},
        )
        try:
            data: dict[str, Any] = response.json()
        except ValueError as exc:
            raise GatewayError("invalid JSON in admin config", 502) from exc
        return data
