"""Pluggable persistence backends for the analysis history slot."""

from __future__ import annotations

from typing import TYPE_CHECKING

from meditriage.persistence.file_backend import FilePersistenceBackend
from meditriage.persistence.memory_backend import MemoryPersistenceBackend
from meditriage.persistence.protocols import IPersistenceBackend

if TYPE_CHECKING:
    from meditriage.core.config import HistoryConfig

__all__ = [
    "IPersistenceBackend",
    "FilePersistenceBackend",
    "MemoryPersistenceBackend",
    "create_backend",
]


def create_backend(config: HistoryConfig) -> IPersistenceBackend:
    """Resolve the persistence backend named by ``config.backend``."""
    if config.backend == "memory":
        return MemoryPersistenceBackend()
    return FilePersistenceBackend(config.store_path)
