"""In-memory persistence backend: dict-backed, nothing touches disk."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class MemoryPersistenceBackend:
    """Stores slots in a plain dict; contents vanish with the process."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    def save(self, slot: str, data: str) -> None:
        self._store[slot] = data
        log.debug("Saved slot %s to memory store", slot)

    def load(self, slot: str) -> str:
        if slot not in self._store:
            raise KeyError(f"Not found in memory store: {slot}")
        return self._store[slot]

    def exists(self, slot: str) -> bool:
        return slot in self._store

    def delete(self, slot: str) -> None:
        self._store.pop(slot, None)
