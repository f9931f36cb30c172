"""Port interfaces for the adapters around the metrics engine.

These protocols define the contracts that adapters must implement.
The core depends only on these interfaces, not concrete implementations.
"""

from collections.abc import AsyncIterable
from typing import Any, Protocol, runtime_checkable

from gatewaylens.core.models import LogEntry


@runtime_checkable
class ExpositionSource(Protocol):
    """Port for fetching the raw metrics exposition text.

    Examples: GatewayClient.
    """

    async def fetch_metrics(self) -> str:
        """Return the current exposition text.

        Raises:
            GatewayError: The gateway answered with a non-success status.
            GatewayUnavailableError: The gateway could not be reached.
        """
        ...


@runtime_checkable
class AdminConfigSource(Protocol):
    """Port for fetching the admin configuration JSON document."""

    async def fetch_config(self) -> dict[str, Any]:
        """Return the decoded admin configuration."""
        ...


@runtime_checkable
class LogStoragePort(Protocol):
    """Port for diagnostic log storage.

    Examples: InMemoryLogStorage.
    """

    async def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        ...

    def read(
        self, since: float = 0, level: str | None = None
    ) -> AsyncIterable[LogEntry]:
        """Read log entries since the given timestamp.

        Args:
            since: Unix timestamp. Returns entries with timestamp > since.
                   Default 0 returns all entries.
            level: Optional level filter (e.g., "WARN").

        Returns:
            Async iterable of LogEntry objects, ordered by timestamp ascending.
        """
        ...
