"""Output formatter protocol for exported analysis records."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from meditriage.models import AnalysisRecord


@runtime_checkable
class IOutputFormatter(Protocol):
    """Protocol for record exporters (PDF, JSON)."""

    def format(self, record: AnalysisRecord, **kwargs: Any) -> bytes:
        """Render the record into output bytes."""
        ...

    def format_to_file(self, record: AnalysisRecord, path: Path, **kwargs: Any) -> Path:
        """Render and write to a file. Returns the output path."""
        ...

    @property
    def content_type(self) -> str:
        """MIME type for the output format (e.g. 'application/pdf')."""
        ...


__all__ = ["IOutputFormatter"]
