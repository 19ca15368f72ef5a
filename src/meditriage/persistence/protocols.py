"""Persistence backend protocol: a named-slot key-value store."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IPersistenceBackend(Protocol):
    """Protocol for slot stores (local file, in-memory, ...)."""

    def save(self, slot: str, data: str) -> None:
        """Replace the serialized contents of *slot*."""
        ...

    def load(self, slot: str) -> str:
        """Return the serialized contents of *slot*. Raises KeyError if absent."""
        ...

    def exists(self, slot: str) -> bool:
        ...

    def delete(self, slot: str) -> None:
        """Remove *slot* (no-op if absent)."""
        ...
