"""JSON output formatter: the record exactly as the history stores it."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from meditriage.exceptions import ExportError
from meditriage.models import AnalysisRecord


class JSONFormatter:
    """Renders an ``AnalysisRecord`` as indented camelCase JSON bytes."""

    def format(self, record: AnalysisRecord, **kwargs: Any) -> bytes:
        return record.model_dump_json(by_alias=True, indent=2).encode()

    def format_to_file(self, record: AnalysisRecord, path: Path, **kwargs: Any) -> Path:
        """Write JSON to *path* and return it."""
        try:
            path.write_bytes(self.format(record, **kwargs))
        except OSError as e:
            raise ExportError(f"Could not write {path}: {e}") from e
        return path

    @property
    def content_type(self) -> str:
        return "application/json"
