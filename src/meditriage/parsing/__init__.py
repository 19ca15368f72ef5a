"""Markdown-response interpreter.

Pure functions over the AI's markdown string: section splitting, triage
classification, quick-view extraction, narration text and export buckets.
None of them raise on malformed input; unrecognized structure degrades to
``TriageLevel.UNKNOWN``, a single fallback section or empty lists.
"""

from __future__ import annotations

from meditriage.parsing.interpreter import AnalysisView, interpret
from meditriage.parsing.report import extract_report_content, strip_markdown
from meditriage.parsing.sections import (
    FALLBACK_TITLE,
    categorize_title,
    display_sections,
    find_section,
    split_sections,
)
from meditriage.parsing.speech import build_speech_text
from meditriage.parsing.summary import (
    SNIPPET_FALLBACK,
    find_next_steps_section,
    find_summary_section,
    quick_actions,
    summary_snippet,
)
from meditriage.parsing.triage import (
    TriageScope,
    classify_document,
    classify_sections,
    classify_triage,
)

__all__ = [
    "AnalysisView",
    "FALLBACK_TITLE",
    "SNIPPET_FALLBACK",
    "TriageScope",
    "build_speech_text",
    "categorize_title",
    "classify_document",
    "classify_sections",
    "classify_triage",
    "display_sections",
    "extract_report_content",
    "find_next_steps_section",
    "find_section",
    "find_summary_section",
    "interpret",
    "quick_actions",
    "split_sections",
    "strip_markdown",
    "summary_snippet",
]
