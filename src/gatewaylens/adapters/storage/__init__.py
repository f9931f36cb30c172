"""Storage adapters implementing core ports."""

from gatewaylens.adapters.storage.in_memory import InMemoryLogStorage

__all__ = ["InMemoryLogStorage"]
