"""In-memory storage adapter for diagnostic log entries."""

from collections.abc import AsyncIterator

from gatewaylens.core.models import LogEntry


class InMemoryLogStorage:
    """In-memory implementation of LogStoragePort.

    Stores log entries in a list. Suitable for testing and for the
    console's short-lived diagnostics. When ``max_entries`` is set, the
    oldest entries are dropped once the limit is reached.
    """

    def __init__(self, max_entries: int | None = 1000) -> None:
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self._entries: list[LogEntry] = []
        self._max_entries = max_entries

    async def write(self, entry: LogEntry) -> None:
        """Write a log entry to storage."""
        self._entries.append(entry)
        if self._max_entries is not None and len(self._entries) > self._max_entries:
            del self._entries[: len(self._entries) - self._max_entries]

    async def read(
        self, since: float = 0, level: str | None = None
    ) -> AsyncIterator[LogEntry]:
        """Read log entries since the given timestamp.

        Returns entries with timestamp > since, ordered by timestamp ascending,
        optionally restricted to one level.
        """
        filtered = [
            e
            for e in self._entries
            if e.timestamp > since and (level is None or e.level == level)
        ]
        for entry in sorted(filtered, key=lambda e: e.timestamp):
            yield entry
