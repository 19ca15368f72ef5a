"""Output formatters for exporting analysis records.

Usage::

    from meditriage.formatters import JSONFormatter, ReportPDFFormatter

    pdf_bytes = ReportPDFFormatter().format(record)
    json_bytes = JSONFormatter().format(record)
"""

from __future__ import annotations

from typing import Any

from meditriage.formatters.json_formatter import JSONFormatter
from meditriage.formatters.protocols import IOutputFormatter

__all__ = [
    "IOutputFormatter",
    "JSONFormatter",
    "ReportPDFFormatter",
    "export_filename",
]


def __getattr__(name: str) -> Any:
    """Lazy-load the PDF formatter so reportlab is only imported when needed."""
    if name in ("ReportPDFFormatter", "export_filename"):
        from meditriage.formatters import pdf_formatter

        return getattr(pdf_formatter, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
