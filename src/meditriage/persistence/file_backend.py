"""File-based persistence backend: one JSON file per slot."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from meditriage.exceptions import PersistenceError

log = logging.getLogger(__name__)


class FilePersistenceBackend:
    """Stores each slot as ``<base_path>/<slot>.json``.

    Writes go through a temporary sibling file and ``os.replace`` so a
    crash mid-write leaves the previous list intact.
    """

    def __init__(self, base_path: Path) -> None:
        self._base = Path(base_path)

    def _slot_path(self, slot: str) -> Path:
        safe_slot = slot.replace("/", "_").replace("\\", "_")
        if not safe_slot.endswith(".json"):
            safe_slot += ".json"
        return self._base / safe_slot

    def save(self, slot: str, data: str) -> None:
        path = self._slot_path(slot)
        tmp = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(data, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise PersistenceError(f"Could not write slot {slot!r} to {path}: {e}") from e
        log.debug("Saved slot %s to %s", slot, path)

    def load(self, slot: str) -> str:
        path = self._slot_path(slot)
        if not path.is_file():
            raise KeyError(f"Not found: {slot} (path: {path})")
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Could not read slot {slot!r} from {path}: {e}") from e

    def exists(self, slot: str) -> bool:
        return self._slot_path(slot).is_file()

    def delete(self, slot: str) -> None:
        path = self._slot_path(slot)
        if path.is_file():
            path.unlink()
