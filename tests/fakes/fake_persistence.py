"""In-memory persistence backends for testing."""

from __future__ import annotations

from meditriage.exceptions import PersistenceError


class FakePersistenceBackend:
    """Dict-backed slot storage for tests; counts writes."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._store: dict[str, str] = dict(initial or {})
        self.save_count = 0

    def save(self, slot: str, data: str) -> None:
        self._store[slot] = data
        self.save_count += 1

    def load(self, slot: str) -> str:
        if slot not in self._store:
            raise KeyError(f"Not found: {slot}")
        return self._store[slot]

    def exists(self, slot: str) -> bool:
        return slot in self._store

    def delete(self, slot: str) -> None:
        self._store.pop(slot, None)


class FailingPersistenceBackend(FakePersistenceBackend):
    """Backend whose writes always fail, as with a full or disabled store."""

    def save(self, slot: str, data: str) -> None:
        raise PersistenceError(f"Storage unavailable for {slot}")
