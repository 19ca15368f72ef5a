"""Triage classification from AI response text.

One phrase-priority classifier serves every call site. ``TriageScope``
selects the phrase table: ``SECTION`` for the body of the triage section
(live view), ``DOCUMENT`` for the whole markdown (history records). The
first level whose phrases occur wins, so "emergency" always beats "mild".
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from meditriage.models import Section, SectionCategory, TriageLevel
from meditriage.parsing.sections import find_section


class TriageScope(str, Enum):
    SECTION = "section"
    DOCUMENT = "document"


TRIAGE_PHRASES: dict[TriageScope, tuple[tuple[TriageLevel, tuple[str, ...]], ...]] = {
    TriageScope.SECTION: (
        (TriageLevel.EMERGENCY, ("emergency",)),
        (TriageLevel.URGENT, ("doctor soon", "see a doctor", "urgent")),
        (TriageLevel.MILD, ("mild", "self-care")),
    ),
    TriageScope.DOCUMENT: (
        (TriageLevel.EMERGENCY, ("emergency", "seek immediate care")),
        (TriageLevel.URGENT, ("see a doctor soon", "medical attention advised")),
        (TriageLevel.MILD, ("likely mild", "self-care")),
    ),
}


def classify_triage(text: str, scope: TriageScope = TriageScope.SECTION) -> TriageLevel:
    lower = (text or "").lower()
    for level, phrases in TRIAGE_PHRASES[scope]:
        if any(p in lower for p in phrases):
            return level
    return TriageLevel.UNKNOWN


def classify_sections(sections: Iterable[Section]) -> TriageLevel:
    """Classify from the first section titled "triage"; ``UNKNOWN`` if there is none."""
    triage_section = find_section(sections, SectionCategory.TRIAGE)
    if triage_section is None:
        return TriageLevel.UNKNOWN
    return classify_triage(" ".join(triage_section.content), TriageScope.SECTION)


def classify_document(markdown: str) -> TriageLevel:
    return classify_triage(markdown, TriageScope.DOCUMENT)
