"""meditriage: AI health triage assistant.

Interprets the markdown response of a multimodal model into a triage card,
narration text, compact history records and printable PDF reports::

    from meditriage import interpret, build_record, HistoryStore

    view = interpret(markdown)
    record = build_record(markdown, patient)
"""

from __future__ import annotations

from typing import Any

from meditriage.client import IAnalysisClient, LiteLLMAnalysisClient
from meditriage.core.config import AppSettings
from meditriage.exceptions import (
    AnalysisClientError,
    ExportError,
    MediTriageError,
    PersistenceError,
)
from meditriage.formatters import IOutputFormatter, JSONFormatter
from meditriage.history import HistoryStore, build_record, extract_summary_quick
from meditriage.models import (
    AnalysisRecord,
    AnalysisRequest,
    Language,
    MediaPayload,
    PatientInput,
    ReportContent,
    Section,
    Sex,
    TriageLevel,
)
from meditriage.parsing import (
    AnalysisView,
    build_speech_text,
    classify_document,
    classify_sections,
    extract_report_content,
    interpret,
    split_sections,
    strip_markdown,
)
from meditriage.services import AnalysisOutcome, AnalysisService, narrate

__all__ = [
    "AnalysisClientError",
    "AnalysisOutcome",
    "AnalysisRecord",
    "AnalysisRequest",
    "AnalysisService",
    "AnalysisView",
    "AppSettings",
    "ExportError",
    "HistoryStore",
    "IAnalysisClient",
    "IOutputFormatter",
    "JSONFormatter",
    "Language",
    "LiteLLMAnalysisClient",
    "MediaPayload",
    "MediTriageError",
    "PatientInput",
    "PersistenceError",
    "ReportContent",
    "ReportPDFFormatter",
    "Section",
    "Sex",
    "TriageLevel",
    "build_record",
    "build_speech_text",
    "classify_document",
    "classify_sections",
    "extract_report_content",
    "extract_summary_quick",
    "interpret",
    "narrate",
    "split_sections",
    "strip_markdown",
]


def __getattr__(name: str) -> Any:
    """Lazy-load the PDF formatter so reportlab is only imported when needed."""
    if name == "ReportPDFFormatter":
        from meditriage.formatters.pdf_formatter import ReportPDFFormatter

        return ReportPDFFormatter
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
