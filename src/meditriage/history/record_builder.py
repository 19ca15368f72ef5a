"""Build compact history records from a finished analysis."""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from typing import Optional

from meditriage.models import AnalysisRecord, PatientInput
from meditriage.parsing import glyphs
from meditriage.parsing.sections import NUMBERED_HEADING, split_lines
from meditriage.parsing.triage import classify_document

SUMMARY_QUICK_LIMIT = 150
ELLIPSIS = "..."

_SUMMARY_HEADING_START = re.compile(
    r"^\s*(?:#+|\*\*|\d+\.|" + glyphs.SUMMARY + "|" + glyphs.SUMMARY_ALT + ")"
)

# Any of these, or a "3. " style number, at the start of a line closes the
# captured summary.
STOP_PREFIXES = (
    glyphs.TRIAGE,
    glyphs.TRAFFIC_LIGHT,
    glyphs.EXPLANATIONS,
    glyphs.TARGET,
    glyphs.REPORT,
    glyphs.AYURVEDA,
    glyphs.NEXT_STEPS,
    glyphs.COMPASS,
    glyphs.DOCTOR,
    "#",
    "**",
)


def is_summary_heading(line: str) -> bool:
    if not _SUMMARY_HEADING_START.match(line):
        return False
    lower = line.lower()
    return ("summary" in lower and "understanding" in lower) or "quick summary" in lower


def truncate(text: str, limit: int = SUMMARY_QUICK_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def extract_summary_quick(markdown: str, limit: int = SUMMARY_QUICK_LIMIT) -> str:
    """Text of the first summary section, space-joined and truncated to *limit*."""
    captured: list[str] = []
    capturing = False
    for line in split_lines(markdown):
        stripped = line.strip()
        if not capturing:
            capturing = is_summary_heading(line)
            continue
        if stripped.startswith(STOP_PREFIXES) or NUMBERED_HEADING.match(stripped):
            break
        if stripped:
            captured.append(stripped.replace("**", "").strip())
    return truncate(" ".join(c for c in captured if c), limit)


def new_record_id() -> str:
    return uuid.uuid4().hex


def build_record(
    markdown: str,
    patient: PatientInput,
    *,
    record_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AnalysisRecord:
    """Create the immutable history record for one successful analysis."""
    created = now or datetime.now(timezone.utc)
    return AnalysisRecord(
        id=record_id or new_record_id(),
        created_at=created.isoformat(),
        patient_age=patient.age or None,
        patient_sex=patient.sex.value,
        duration=patient.duration or None,
        conditions=patient.conditions or None,
        medications=patient.medications or None,
        triage_level=classify_document(markdown).record_label,
        summary_quick=extract_summary_quick(markdown),
        markdown=markdown,
    )
