"""Split an AI markdown response into titled sections.

The upstream prompt asks for headed sections, but heading style is not
guaranteed: ``## 🚨 Triage``, ``3. **Triage**`` and ``**🚨 Triage & Urgency**``
all occur. Detection is therefore heuristic and purely line-based.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from meditriage.models import Section, SectionCategory

FALLBACK_TITLE = "Analysis Output"

MAX_HEADING_LENGTH = 100
MAX_BOLD_TITLE_LENGTH = 80
MIN_HEADING_LENGTH = 4

NUMBERED_HEADING = re.compile(r"^\d+\.\s")
_LEADING_MARKERS = re.compile(r"^[#\d.\s*]+")
_TRAILING_MARKERS = re.compile(r"[*:]+$")

_VS16 = chr(0xFE0F)
_ZWJ = chr(0x200D)
_GLYPH = "[{}-{}{}-{}{}-{}]".format(
    chr(0x1F300), chr(0x1FAFF), chr(0x2600), chr(0x26FF), chr(0x2700), chr(0x27BF)
)
# One emoji, with its variation selector and any ZWJ continuation (e.g. the
# doctor glyph).
_LEADING_GLYPH = re.compile(rf"^{_GLYPH}{_VS16}?(?:{_ZWJ}{_GLYPH}{_VS16}?)*\s*")

# Ordered, first match wins. Section lookups in the summary, triage and
# speech code go through ``title_matches`` so they share these keywords.
SECTION_KEYWORDS: tuple[tuple[SectionCategory, tuple[str, ...]], ...] = (
    (SectionCategory.SAFETY, ("safety",)),
    (SectionCategory.SUMMARY, ("summary",)),
    (SectionCategory.TRIAGE, ("triage",)),
    (SectionCategory.EXPLANATION, ("explanation", "differential")),
    (SectionCategory.REPORT, ("report", "lab")),
    (SectionCategory.AYURVEDA, ("ayurveda", "ayurvedic")),
    (SectionCategory.NEXT_STEPS, ("next", "can do")),
    (SectionCategory.HANDOVER, ("doctor", "handover")),
)

_KEYWORDS_BY_CATEGORY = dict(SECTION_KEYWORDS)


def split_lines(markdown: str) -> list[str]:
    return markdown.replace("\r\n", "\n").split("\n")


def is_heading_candidate(line: str) -> bool:
    """Whether *line* looks like a section heading."""
    hashed_or_numbered = (
        line.startswith("#") or bool(NUMBERED_HEADING.match(line))
    ) and len(line) < MAX_HEADING_LENGTH
    bold_title = (
        line.startswith("**") and line.endswith("**") and len(line) < MAX_BOLD_TITLE_LENGTH
    )
    return (hashed_or_numbered or bold_title) and len(line.strip()) >= MIN_HEADING_LENGTH


def normalize_title(line: str) -> str:
    """Strip heading punctuation, numbering, bold markers and one leading emoji."""
    title = _LEADING_MARKERS.sub("", line)
    title = _TRAILING_MARKERS.sub("", title.rstrip()).strip()
    return _LEADING_GLYPH.sub("", title).strip()


def categorize_title(title: str) -> SectionCategory:
    lower = title.lower()
    for category, keywords in SECTION_KEYWORDS:
        if any(k in lower for k in keywords):
            return category
    return SectionCategory.GENERAL


def title_matches(title: str, category: SectionCategory) -> bool:
    """Whether *title* contains any keyword of *category* (case-insensitive)."""
    lower = title.lower()
    return any(k in lower for k in _KEYWORDS_BY_CATEGORY.get(category, ()))


def split_sections(markdown: str) -> list[Section]:
    """Split *markdown* into an ordered list of sections.

    Every line after the first heading lands in exactly one section's
    content, except the heading lines themselves. Lines before the first
    heading are dropped. When no heading is recognized, a single
    ``"Analysis Output"`` section holds every line.
    """
    lines = split_lines(markdown)
    sections: list[Section] = []
    current: Optional[Section] = None

    for line in lines:
        title = normalize_title(line) if is_heading_candidate(line) else ""
        if title:
            if current is not None:
                sections.append(current)
            current = Section(title=title, content=[], category=categorize_title(title))
        elif current is not None:
            current.content.append(line)

    if current is not None:
        sections.append(current)

    if not sections:
        sections.append(Section(title=FALLBACK_TITLE, content=list(lines)))

    return sections


def find_section(
    sections: Iterable[Section],
    category: SectionCategory,
    *,
    exclude: Sequence[str] = (),
) -> Optional[Section]:
    """Return the first section whose title matches *category*.

    Titles containing any word in *exclude* are skipped.
    """
    for section in sections:
        lower = section.title.lower()
        if title_matches(section.title, category) and not any(w in lower for w in exclude):
            return section
    return None


def display_sections(sections: Iterable[Section]) -> list[Section]:
    """Sections for the collapsible outline; triage and safety are shown elsewhere."""
    return [
        s
        for s in sections
        if not title_matches(s.title, SectionCategory.TRIAGE)
        and not title_matches(s.title, SectionCategory.SAFETY)
    ]
