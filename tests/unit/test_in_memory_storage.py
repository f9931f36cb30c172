"""Tests for the in-memory log storage adapter."""

import pytest

from gatewaylens.adapters.storage.in_memory import InMemoryLogStorage
from gatewaylens.core.models import LogEntry
from gatewaylens.core.ports import LogStoragePort


async def _read_all(storage: InMemoryLogStorage, **kwargs) -> list[LogEntry]:
    return [entry async for entry in storage.read(**kwargs)]


class TestInMemoryLogStorage:
    """Tests for InMemoryLogStorage adapter."""

    @pytest.mark.storage
    def test_implements_log_storage_port(self) -> None:
        """InMemoryLogStorage must satisfy LogStoragePort protocol."""
        assert isinstance(InMemoryLogStorage(), LogStoragePort)

    @pytest.mark.storage
    async def test_write_and_read_single_entry(self) -> None:
        storage = InMemoryLogStorage()
        entry = LogEntry(timestamp=1000.0, level="WARN", message="skipped line")

        await storage.write(entry)

        assert await _read_all(storage) == [entry]

    @pytest.mark.storage
    async def test_read_returns_empty_when_no_entries(self) -> None:
        assert await _read_all(InMemoryLogStorage()) == []

    @pytest.mark.storage
    async def test_read_filters_by_since_timestamp(self) -> None:
        storage = InMemoryLogStorage()
        old_entry = LogEntry(timestamp=1000.0, level="INFO", message="old")
        new_entry = LogEntry(timestamp=2000.0, level="INFO", message="new")
        await storage.write(old_entry)
        await storage.write(new_entry)

        assert await _read_all(storage, since=1000.0) == [new_entry]

    @pytest.mark.storage
    async def test_read_filters_by_level(self) -> None:
        storage = InMemoryLogStorage()
        warning = LogEntry(timestamp=1000.0, level="WARN", message="skipped")
        failure = LogEntry(timestamp=1001.0, level="ERROR", message="failed")
        await storage.write(warning)
        await storage.write(failure)

        assert await _read_all(storage, level="ERROR") == [failure]

    @pytest.mark.storage
    async def test_read_returns_entries_ordered_by_timestamp(self) -> None:
        storage = InMemoryLogStorage()
        entry_3 = LogEntry(timestamp=3000.0, level="INFO", message="third")
        entry_1 = LogEntry(timestamp=1000.0, level="INFO", message="first")
        entry_2 = LogEntry(timestamp=2000.0, level="INFO", message="second")

        # Write out of order
        for entry in (entry_3, entry_1, entry_2):
            await storage.write(entry)

        assert await _read_all(storage) == [entry_1, entry_2, entry_3]

    @pytest.mark.storage
    async def test_oldest_entries_dropped_beyond_limit(self) -> None:
        storage = InMemoryLogStorage(max_entries=2)
        entries = [
            LogEntry(timestamp=1000.0 + i, level="INFO", message=f"msg {i}")
            for i in range(3)
        ]
        for entry in entries:
            await storage.write(entry)

        assert await _read_all(storage) == entries[1:]

    @pytest.mark.storage
    def test_non_positive_limit_rejected(self) -> None:
        with pytest.raises(ValueError, match="max_entries"):
            InMemoryLogStorage(max_entries=0)
