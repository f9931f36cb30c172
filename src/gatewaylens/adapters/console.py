"""Console operations shared by the ASGI and FastAPI adapters.

Each operation fetches the current exposition text, runs it through the
metrics engine and returns JSON-ready data. Gateway failures propagate as
GatewayLensError subclasses; ``translate_error`` maps them to responses.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from gatewaylens.adapters.storage.in_memory import InMemoryLogStorage
from gatewaylens.core.config import SummaryConfig
from gatewaylens.core.encoding.dashboard import endpoints_to_list, summary_to_dict
from gatewaylens.core.encoding.prometheus import parse_exposition
from gatewaylens.core.endpoints import aggregate_samples
from gatewaylens.core.exceptions import (
    ConfigurationError,
    GatewayError,
    GatewayUnavailableError,
)
from gatewaylens.core.logs import log_exception
from gatewaylens.core.models import ParseResult
from gatewaylens.core.ports import AdminConfigSource, ExpositionSource, LogStoragePort
from gatewaylens.core.summary import summarize_samples

logger = logging.getLogger(__name__)


def translate_error(exc: Exception) -> tuple[int, dict[str, str]]:
    """Map an exception to an HTTP status and JSON error body.

    - GatewayError: the gateway's own status, "Gateway error: <body>"
    - GatewayUnavailableError, ConfigurationError: 500 with the message
    - anything else: 500 "Internal Server Error"
    """
    if isinstance(exc, GatewayError):
        return exc.status_code, {"error": str(exc)}
    if isinstance(exc, (GatewayUnavailableError, ConfigurationError)):
        return 500, {"error": str(exc)}
    return 500, {"error": "Internal Server Error"}


class MetricsConsole:
    """Backs the console endpoints with a metrics source and the engine."""

    def __init__(
        self,
        source: ExpositionSource,
        config_source: AdminConfigSource | None = None,
        log_storage: LogStoragePort | None = None,
        summary_config: SummaryConfig | None = None,
    ) -> None:
        """Initialize the console.

        Args:
            source: Where the exposition text comes from.
            config_source: Where the admin configuration comes from (optional).
            log_storage: Storage for parse diagnostics and request failures.
                Defaults to a fresh InMemoryLogStorage.
            summary_config: Metric names and health threshold.
        """
        self.source = source
        self.config_source = config_source
        self.log_storage = log_storage if log_storage is not None else InMemoryLogStorage()
        self.summary_config = summary_config or SummaryConfig()

    async def _parse_current(self) -> ParseResult:
        text = await self.source.fetch_metrics()
        result = parse_exposition(text)
        for entry in result.diagnostics:
            await self.log_storage.write(entry)
        return result

    async def raw_metrics(self) -> str:
        """Return the exposition text unchanged."""
        return await self.source.fetch_metrics()

    async def summary(self) -> dict[str, Any]:
        """Return the dashboard summary as a JSON-ready dict."""
        result = await self._parse_current()
        return summary_to_dict(summarize_samples(result.samples, self.summary_config))

    async def endpoints(self) -> dict[str, Any]:
        """Return per-endpoint statistics with an ISO-8601 UTC timestamp."""
        result = await self._parse_current()
        stats = aggregate_samples(result.samples, self.summary_config)
        return {
            "endpoints": endpoints_to_list(stats),
            "timestamp": datetime.now(UTC).isoformat(),
        }

    async def admin_config(self) -> dict[str, Any]:
        """Return the admin configuration document.

        Raises:
            ConfigurationError: No config source is attached.
        """
        if self.config_source is None:
            raise ConfigurationError("Admin config source not configured")
        return await self.config_source.fetch_config()

    async def record_failure(self, message: str) -> None:
        """Record the exception being handled as an ERROR diagnostic."""
        logger.exception(message)
        await self.log_storage.write(log_exception(message))
