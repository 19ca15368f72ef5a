"""Local analysis history: record construction and the newest-first store."""

from __future__ import annotations

from meditriage.history.record_builder import build_record, extract_summary_quick
from meditriage.history.store import HistoryStore

__all__ = ["HistoryStore", "build_record", "extract_summary_quick"]
